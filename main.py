import sys
import re
import logging
import datetime
from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill
from core.models import (
    ApplicationType, BreakerInput, ConductorInput, ConductorMaterial, ConduitFillInput,
    DutyCycle, LengthUnit, StandardId, TemperatureUnit, VoltageSystem, WireEntry,
)
from core.converters import convert_power_unit
from core.config import DEFAULT_VOLTAGES, STANDARD_DEFAULTS
from core.errors import InputValidationError, NoSolutionError, UnsupportedStandardError
from core import router

def ask(prompt, default=None, cast=str):
    raw = input(f"{prompt} [{default}]: " if default is not None else f"{prompt}: ").strip()
    if not raw:
        return default
    return cast(raw)

def parse_value_unit(text, default_unit):
    # "50 m", "100ft", "10 KW"
    match = re.match(r"([0-9\.]+)\s*([a-zA-Z°]+)", text)
    if match:
        return float(match.group(1)), match.group(2)
    return float(text), default_unit

def choose_standard(allowed):
    print("Normas: " + ", ".join(f"({i + 1}) {s.value}" for i, s in enumerate(allowed)))
    choice = ask("Seleccione Norma", "1", str)
    try:
        return allowed[int(choice) - 1]
    except (ValueError, IndexError):
        return router.resolve_standard(choice)

def get_conductor_input():
    print("\n--- Dimensionamiento de Conductor ---")
    standard = choose_standard(list(StandardId))
    defaults = STANDARD_DEFAULTS[standard]

    p_text = ask("Carga (ej: 20 A, 1500 W, 5 HP, 10 KVA)")
    voltage = ask("Voltaje (V)", DEFAULT_VOLTAGES[standard], float)

    if standard.is_dc:
        system, phases, pf = VoltageSystem.DC, 1, 1.0
    else:
        phases = ask("Fases (1 o 3)", 1, int)
        system = VoltageSystem.THREE_PHASE if phases == 3 else VoltageSystem.SINGLE_PHASE
        pf = ask("Factor de Potencia", 1.0, float)

    val, unit = parse_value_unit(p_text, "W")
    watts, amps = convert_power_unit(val, unit, voltage, phases, pf)

    l_text = ask("Longitud del circuito (ej: 25 m, 75 ft)")
    l_val, l_unit = parse_value_unit(l_text, "m")
    length_unit = LengthUnit.FEET if l_unit.lower() in ("ft", "pies", "pie") else LengthUnit.METERS

    temp = ask("Temperatura Ambiente (°C)", defaults["ambient_temperature"], float)
    is_cont = ask("¿Es Carga Continua (>3h)? (s/n)", "s").lower() == "s"
    is_al = ask("Conductor de Aluminio? (s/n)", "n").lower() == "s"

    kwargs = {}
    if standard == StandardId.NEC:
        kwargs["temperature_rating"] = ask("Temperatura nominal del conductor (60/75/90)", 75, int)
        kwargs["number_of_conductors"] = ask("N° Total de conductores en el ducto (NEC 310.15(C)(1))", 3, int)
    elif standard == StandardId.IEC:
        kwargs["installation_method"] = ask("Método de instalación (A1, A2, B1, B2, C, D1, D2, E, F, G)", "B1").upper()
        kwargs["number_of_conductors"] = ask("N° de circuitos agrupados", 1, int)
    elif standard == StandardId.BS7671:
        kwargs["installation_method"] = ask("Método BS 7671 (A1, A2, B1, B2, C, D1, D2, E, F, G)", "C").upper()
        kwargs["number_of_conductors"] = ask("N° de circuitos agrupados", 1, int)
        load_type = ask("Tipo de carga para diversidad (socket_outlets, lighting, cooking...)", "")
        if load_type:
            kwargs["load_type"] = load_type.lower()
    else:
        app = ask("Aplicación (automotive, marine, solar, telecom, battery, led)", "")
        if app:
            kwargs["application"] = ApplicationType(app.lower())

    return ConductorInput(
        standard=standard,
        voltage=voltage,
        circuit_length=l_val,
        load_current=amps,
        load_power=None if amps is not None else watts,
        voltage_system=system,
        conductor_material=ConductorMaterial.ALUMINUM if is_al else ConductorMaterial.COPPER,
        ambient_temperature=temp,
        power_factor=pf,
        duty_cycle=DutyCycle.CONTINUOUS if is_cont else DutyCycle.INTERMITTENT,
        length_unit=length_unit,
        temperature_unit=TemperatureUnit.CELSIUS,
        **kwargs
    )

def get_breaker_input():
    print("\n--- Protección DC (Breaker / Fusible) ---")
    standard = choose_standard([StandardId.IEC, StandardId.NEC])
    apps = [a.value for a in ApplicationType]
    app = ApplicationType(ask(f"Aplicación ({', '.join(apps)})", "automotive").lower())
    voltage = ask("Voltaje del sistema (V)", 12.0, float)
    is_cont = ask("¿Servicio continuo? (s/n)", "s").lower() == "s"
    temp = ask("Temperatura Ambiente (°C)", 25.0, float)

    kwargs = {}
    if app == ApplicationType.SOLAR:
        kwargs["panel_isc"] = ask("Isc por panel (A)", None, float)
        kwargs["number_of_panels"] = ask("N° de paneles en paralelo", 1, int)
    else:
        p_text = ask("Carga (ej: 20 A, 240 W)")
        val, unit = parse_value_unit(p_text, "W")
        if unit.upper() == "A":
            kwargs["load_current"] = val
        else:
            kwargs["load_power"], _ = convert_power_unit(val, unit, voltage, 1, 1.0)

    gauge = ask("Calibre del cable (opcional)", "")
    return BreakerInput(
        application=app,
        standard=standard,
        system_voltage=voltage,
        duty_cycle=DutyCycle.CONTINUOUS if is_cont else DutyCycle.INTERMITTENT,
        ambient_temperature=temp,
        environment=ask("Ambiente (indoor, marine, automotive)", "indoor"),
        wire_gauge=gauge or None,
        **kwargs
    )

def get_conduit_input():
    print("\n--- Llenado de Ducto ---")
    standard = choose_standard([StandardId.IEC, StandardId.NEC])
    conduit = ask("Tipo de Ducto (NEC: EMT, PVC, IMC, RMC, Steel / IEC: PVC, Steel)", "PVC")
    default_ins = "THHN" if standard == StandardId.NEC else "PVC"

    wires = []
    while True:
        gauge = ask(f"[Cable #{len(wires) + 1}] Calibre (vacío para terminar)", "")
        if not gauge:
            break
        qty = ask("Cantidad", 1, int)
        insulation = ask("Aislamiento", default_ins).upper()
        wires.append(WireEntry(gauge, qty, insulation))

    return ConduitFillInput(
        wires=wires,
        conduit_type=conduit,
        standard=standard,
        future_fill_reserve=ask("Reserva futura (%)", 0.0, float),
        ambient_temperature=ask("Temperatura Ambiente (°C)", 30.0, float),
        application=ask("Aplicación (residential, commercial, industrial...)", "commercial"),
        conduit_size=ask("Tamaño de ducto (vacío para elegir automáticamente)", "") or None,
    )

def print_conductor(res):
    print("-" * 90)
    print(f"Norma: {res.standard.value} | Calibre: {res.size} | Corriente diseño: {res.design_current:.2f} A")
    print(f"Ampacidad base: {res.base_ampacity:.1f} A | Ajustada: {res.adjusted_ampacity:.1f} A")
    print(f"Caída de tensión: {res.voltage_drop_volts:.2f} V ({res.voltage_drop_percent:.2f}% / límite {res.voltage_drop_limit}%)")
    print(f"Pérdidas: {res.power_loss_watts:.1f} W | Eficiencia: {res.efficiency_percent:.2f}%")
    print(f"Factores: {res.factors.describe()}")
    if res.alternatives:
        alts = ", ".join(f"{a.size} ({a.voltage_drop_percent:.2f}%)" for a in res.alternatives)
        print(f"Alternativas: {alts}")
    print_compliance(res.compliance)

def print_breaker(res):
    print("-" * 90)
    kind = "Fusible" if res.is_automotive_fuse else "Breaker"
    print(f"{kind}: {res.rating:g} A ({res.standard}) | Corriente ajustada: {res.adjusted_current:.2f} A")
    print(f"Método: {res.calculation_method}")
    print_compliance(res.compliance)

def print_conduit(res):
    print("-" * 90)
    for w in res.wires:
        note = f" (convertido de {w.original_gauge})" if w.converted else ""
        print(f"  {w.quantity} x {w.gauge} {w.insulation}{note}: {w.total_area:.4f} {res.area_unit}")
    print(f"Ducto {res.conduit_type} {res.trade_size} | Llenado {res.fill_percent:.1f}% (máx {res.max_fill_percent:.0f}%, {res.fill_rule})")
    sizes = ", ".join(f"{a.trade_size} ({a.fill_percent:.1f}%{'' if a.compliant else ' !'})" for a in res.alternatives)
    print(f"Tamaños: {sizes}")
    print_compliance(res.compliance)

def print_compliance(flags):
    status = "CUMPLE" if flags.compliant else "NO CUMPLE"
    failed = flags.failed()
    print(f"Cumplimiento: {status}" + (f" ({', '.join(failed)})" if failed else ""))

def export_to_excel(results):
    wb = Workbook()
    ws = wb.active
    ws.title = "Resultados"
    ws.append(["Tipo", "Norma", "Resultado", "Detalle", "Cumple", "Referencia"])

    header_fill = PatternFill(start_color="DDDDDD", end_color="DDDDDD", fill_type="solid")
    for cell in ws[1]:
        cell.font = Font(bold=True)
        cell.fill = header_fill

    for kind, res in results:
        if kind == "Conductor":
            row = [kind, res.standard.value, res.size, f"{res.voltage_drop_percent:.2f}% VD"]
        elif kind == "Protección":
            row = [kind, res.standard, f"{res.rating:g} A", f"{res.adjusted_current:.2f} A ajustada"]
        else:
            row = [kind, res.standard.value, f"{res.conduit_type} {res.trade_size}", f"{res.fill_percent:.1f}% llenado"]
        ws.append(row + ["SI" if res.compliance.compliant else "NO", res.reference])

    for col in ws.columns:
        ws.column_dimensions[col[0].column_letter].width = 20

    filename = f"Memoria_Calculo_{datetime.datetime.now().strftime('%Y%m%d_%H%M%S')}.xlsx"
    wb.save(filename)
    print(f"\n[INFO] Excel generado: {filename}")

def main():
    if "--verbose" in sys.argv:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    print("==========================================================")
    print(" CALCULADORA MULTINORMA (NEC / IEC / DC)")
    print("==========================================================")

    actions = {
        "1": ("Conductor", get_conductor_input, router.size_conductor, print_conductor),
        "2": ("Protección", get_breaker_input, router.size_breaker, print_breaker),
        "3": ("Ducto", get_conduit_input, router.size_conduit_fill, print_conduit),
    }
    results = []

    while True:
        print("\n(1) Conductor  (2) Breaker/Fusible DC  (3) Llenado de Ducto  (Enter) Salir")
        choice = input("Opción: ").strip()
        if choice not in actions:
            break
        kind, read_input, calculate, show = actions[choice]
        try:
            res = calculate(read_input())
        except InputValidationError as e:
            print("Errores en los datos:")
            for msg in e.messages:
                print(f"  - {msg}")
            continue
        except (NoSolutionError, UnsupportedStandardError, ValueError) as e:
            print(f"Error: {e}")
            continue
        show(res)
        results.append((kind, res))

    if not results:
        print("No se realizaron cálculos.")
        sys.exit()

    if input("\n¿Exportar reporte a Excel? (s/n): ").lower() == "s":
        export_to_excel(results)

if __name__ == "__main__":
    main()

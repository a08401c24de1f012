import streamlit as st
import pandas as pd
import io
from core.models import (
    ApplicationType, BreakerInput, ConductorInput, ConductorMaterial, ConduitFillInput,
    DutyCycle, LengthUnit, SolarConfiguration, StandardId, TemperatureUnit,
    VoltageDropCategory, VoltageSystem, WireEntry,
)
from core.config import DEFAULT_VOLTAGES, STANDARD_DEFAULTS
from core.converters import convert_power_unit
from core.errors import InputValidationError, NoSolutionError
from core import router
from standards import bs7671_tables, conduit_fill, dc_tables, iec_tables, nec_tables

# --- Page Config ---
st.set_page_config(
    page_title="Calculadora Multinorma (NEC / IEC / DC)",
    page_icon="⚡",
    layout="wide",
    initial_sidebar_state="expanded"
)

# --- Custom CSS ---
st.markdown("""
<style>
    .reportview-container { background: #f0f2f6; }
    .main-header { font-family: 'Inter', sans-serif; color: #1E3A8A; font-weight: 700; }
    .stDataFrame { border-radius: 10px; overflow: hidden; }
</style>
""", unsafe_allow_html=True)

# --- Helpers ---
def compliance_df(flags):
    rows = [{"Verificación": name, "Cumple": "✅" if ok else "❌"} for name, ok in flags.applicable().items()]
    return pd.DataFrame(rows)

def to_excel(sheets):
    output = io.BytesIO()
    with pd.ExcelWriter(output, engine='openpyxl') as writer:
        for name, df in sheets.items():
            df.to_excel(writer, index=False, sheet_name=name)
    return output.getvalue()

def run(calculation, inp):
    """Shows validation and no-solution errors in the page instead of raising."""
    try:
        return calculation(inp)
    except InputValidationError as e:
        for msg in e.messages:
            st.error(msg)
    except NoSolutionError as e:
        st.warning(str(e))
    return None

def show_download(sheets, file_name):
    st.download_button(
        "📥 Descargar Resultados (Excel)",
        data=to_excel(sheets),
        file_name=file_name,
        mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    )

# --- Sidebar ---
with st.sidebar:
    st.title("Configuración")
    std_label = st.selectbox("Norma de conductores", [s.value for s in StandardId])
    standard = StandardId(std_label)
    st.info("Breakers y ductos usan NEC o IEC (IEC por defecto).")
    ac_label = st.radio("Norma de protección / ducto", ["IEC", "NEC"], horizontal=True)
    ac_standard = StandardId(ac_label)

st.markdown("<h1 class='main-header'>⚡ Calculadora Multinorma</h1>", unsafe_allow_html=True)
st.markdown("---")

tab_cond, tab_brk, tab_duct = st.tabs(["🔌 Conductor", "🛡️ Protección DC", "🧱 Llenado de Ducto"])

# --- Conductor ---
with tab_cond:
    defaults = STANDARD_DEFAULTS[standard]

    st.markdown("##### ⚡ Datos Eléctricos")
    c_p1, c_p2, c_v1, c_v2, c_fp = st.columns([1.5, 0.8, 1.2, 0.8, 1])
    power = c_p1.number_input("Carga", 0.0, value=20.0, step=0.1, format="%.2f")
    unit = c_p2.selectbox("Unidad", ["A", "W", "KW", "HP", "KVA"])
    voltage = c_v1.number_input("Voltaje (V)", value=DEFAULT_VOLTAGES[standard], step=1.0)
    if standard.is_dc:
        phases, pf = 1, 1.0
        c_v2.write("DC")
    else:
        phases = c_v2.radio("Fases", [1, 3], horizontal=True)
        pf = c_fp.number_input("FP", 0.1, 1.0, 1.0, 0.05)

    c_f1, c_f2, c_f3 = st.columns(3)
    is_cont = c_f1.toggle("Carga Continua", True)
    is_al = c_f2.toggle("Aluminio", False)
    category = c_f3.selectbox("Categoría de caída", [c.value for c in VoltageDropCategory])

    st.markdown("##### 📏 Instalación y Ambiente")
    c_L1, c_L2, c_T1, c_T2 = st.columns([1.5, 0.8, 1.2, 1])
    length = c_L1.number_input("Longitud", 1.0, value=25.0, step=1.0)
    l_unit = c_L2.selectbox("U.Long", ["m", "ft"], index=0 if standard in (StandardId.IEC, StandardId.BS7671) else 1)
    temp = c_T1.number_input("Temp. Amb (°C)", value=float(defaults["ambient_temperature"]), step=1.0)

    extra = {}
    if standard == StandardId.NEC:
        extra["temperature_rating"] = c_T2.selectbox("Aislamiento (°C)", list(nec_tables.TEMPERATURE_RATINGS), index=1)
        c_D1, c_D2 = st.columns([2, 1])
        extra["installation_method"] = c_D1.selectbox("Instalación", list(nec_tables.INSTALLATION_FACTORS))
        extra["number_of_conductors"] = c_D2.number_input("Conductores en ducto", 1, 100, 3)
    elif standard == StandardId.IEC:
        extra["temperature_rating"] = c_T2.selectbox("Aislamiento (°C)", [70, 90], index=1)
        c_D1, c_D2, c_D3 = st.columns(3)
        extra["installation_method"] = c_D1.selectbox("Método IEC 60364-5-52", list(iec_tables.INSTALLATION_FACTORS), index=2)
        extra["number_of_conductors"] = c_D2.number_input("Circuitos agrupados", 1, 100, 1)
        if extra["installation_method"] in iec_tables.BURIED_METHODS:
            extra["soil_thermal_resistivity"] = c_D3.number_input("Resistividad del suelo (K·m/W)", 0.5, 5.0, 2.5)
    elif standard == StandardId.BS7671:
        extra["temperature_rating"] = c_T2.selectbox("Aislamiento (°C)", list(bs7671_tables.TEMPERATURE_RATINGS))
        c_D1, c_D2, c_D3 = st.columns(3)
        extra["installation_method"] = c_D1.selectbox("Método BS 7671", list(bs7671_tables.INSTALLATION_FACTORS))
        extra["number_of_conductors"] = c_D2.number_input("Circuitos agrupados", 1, 100, 1)
        extra["load_type"] = c_D3.selectbox("Diversidad (tipo de carga)", [None] + list(bs7671_tables.LOAD_TYPES),
                                            format_func=lambda t: "Sin diversidad" if t is None else t)
    else:
        apps = list(dc_tables.DC_WIRE_TABLES)
        default_app = dc_tables.DEFAULT_APPLICATIONS[standard]
        app = c_T2.selectbox("Aplicación", apps, index=apps.index(default_app))
        extra["application"] = ApplicationType(app)
        extra["installation_method"] = st.selectbox("Instalación", list(dc_tables.DC_INSTALLATION_METHODS))

    if st.button("Calcular Conductor", type="primary", use_container_width=True):
        watts, amps = convert_power_unit(power, unit, voltage, phases, pf)
        inp = ConductorInput(
            standard=standard,
            voltage=voltage,
            circuit_length=length,
            load_current=amps,
            load_power=None if amps is not None else watts,
            voltage_system=VoltageSystem.DC if standard.is_dc else (
                VoltageSystem.THREE_PHASE if phases == 3 else VoltageSystem.SINGLE_PHASE),
            conductor_material=ConductorMaterial.ALUMINUM if is_al else ConductorMaterial.COPPER,
            ambient_temperature=temp,
            power_factor=pf,
            duty_cycle=DutyCycle.CONTINUOUS if is_cont else DutyCycle.INTERMITTENT,
            voltage_drop_category=VoltageDropCategory(category),
            length_unit=LengthUnit(l_unit),
            temperature_unit=TemperatureUnit.CELSIUS,
            **extra
        )
        res = run(router.size_conductor, inp)
        if res:
            m1, m2, m3, m4 = st.columns(4)
            m1.metric("Calibre", res.size)
            m2.metric("Ampacidad ajustada", f"{res.adjusted_ampacity:.1f} A")
            m3.metric("% VD", f"{res.voltage_drop_percent:.2f}%", help=f"Límite {res.voltage_drop_limit}%")
            m4.metric("Eficiencia", f"{res.efficiency_percent:.2f}%")
            st.caption(res.reference)

            summary = pd.DataFrame([{
                "Norma": res.standard.value, "Calibre": res.size, "Área (mm²)": round(res.area_mm2, 2),
                "I diseño (A)": round(res.design_current, 2), "Ampacidad base": res.base_ampacity,
                "Ampacidad ajustada": round(res.adjusted_ampacity, 2), "VD (V)": round(res.voltage_drop_volts, 2),
                "% VD": round(res.voltage_drop_percent, 2), "Pérdidas (W)": round(res.power_loss_watts, 1),
            }])
            factors = pd.DataFrame([res.factors.__dict__ | {"total": res.factors.total}])
            alternatives = pd.DataFrame([a.__dict__ for a in res.alternatives])

            st.dataframe(summary, use_container_width=True)
            c_a, c_b = st.columns(2)
            c_a.dataframe(factors, use_container_width=True)
            c_b.dataframe(compliance_df(res.compliance), use_container_width=True)
            st.markdown("**Alternativas**")
            st.dataframe(alternatives, use_container_width=True)
            show_download({"Conductor": summary, "Factores": factors, "Alternativas": alternatives},
                          "memoria_conductor.xlsx")

# --- Breaker ---
with tab_brk:
    c1, c2, c3 = st.columns(3)
    app = ApplicationType(c1.selectbox("Aplicación", [a.value for a in ApplicationType]))
    sys_v = c2.number_input("Voltaje del sistema (V)", 1.0, 1000.0, 12.0, step=1.0)
    b_temp = c3.number_input("Temp. Amb (°C)", -40.0, 150.0, 25.0, step=1.0, key="brk_temp")

    c4, c5, c6 = st.columns(3)
    duty = DutyCycle.CONTINUOUS if c4.toggle("Servicio continuo", True) else DutyCycle.INTERMITTENT
    env = c5.selectbox("Ambiente", ["indoor", "outdoor", "marine", "automotive"])
    gauge = c6.text_input("Calibre del cable (opcional)", "")

    b_kwargs = {}
    if app == ApplicationType.SOLAR:
        s1, s2, s3 = st.columns(3)
        b_kwargs["panel_isc"] = s1.number_input("Isc por panel (A)", 0.1, 100.0, 9.5)
        b_kwargs["number_of_panels"] = s2.number_input("N° de paneles", 1, 200, 2)
        b_kwargs["solar_configuration"] = SolarConfiguration(s3.selectbox("Conexión", ["parallel", "series"]))
    else:
        l1, l2 = st.columns(2)
        b_val = l1.number_input("Carga", 0.0, value=20.0, step=0.5, key="brk_load")
        if l2.selectbox("Unidad", ["A", "W"], key="brk_unit") == "A":
            b_kwargs["load_current"] = b_val
        else:
            b_kwargs["load_power"] = b_val

    if st.button("Calcular Protección", type="primary", use_container_width=True):
        inp = BreakerInput(
            application=app, standard=ac_standard, system_voltage=sys_v, duty_cycle=duty,
            ambient_temperature=b_temp, environment=env, wire_gauge=gauge or None, **b_kwargs
        )
        res = run(router.size_breaker, inp)
        if res:
            m1, m2, m3 = st.columns(3)
            m1.metric("Fusible" if res.is_automotive_fuse else "Breaker", f"{res.rating:g} A")
            m2.metric("Corriente ajustada", f"{res.adjusted_current:.2f} A")
            m3.metric("Norma", res.standard)
            st.caption(res.calculation_method)

            device = pd.DataFrame([res.device.__dict__])
            alternatives = pd.DataFrame([a.__dict__ for a in res.alternatives])
            st.dataframe(device, use_container_width=True)
            st.dataframe(compliance_df(res.compliance), use_container_width=True)
            if not alternatives.empty:
                st.markdown("**Alternativas**")
                st.dataframe(alternatives, use_container_width=True)
            show_download({"Protección": device, "Alternativas": alternatives}, "memoria_proteccion.xlsx")

# --- Conduit ---

with tab_duct:
    if "wires_df" not in st.session_state:
        st.session_state.wires_df = pd.DataFrame(
            [{"Calibre": "6", "Cantidad": 3, "Aislamiento": "THHN", "Norma calibre": "NEC"},
             {"Calibre": "16", "Cantidad": 1, "Aislamiento": "THHN", "Norma calibre": "NEC"}]
        )

    st.caption("Los calibres escritos en la otra norma se convierten al equivalente más cercano.")
    wires_df = st.data_editor(
        st.session_state.wires_df,
        num_rows="dynamic",
        use_container_width=True,
        column_config={
            "Cantidad": st.column_config.NumberColumn(min_value=1, step=1),
            "Norma calibre": st.column_config.SelectboxColumn(options=["NEC", "IEC"]),
        },
        key="wires_editor",
    )

    d1, d2, d3, d4 = st.columns(4)
    conduit_type = d1.selectbox("Tipo de Ducto", list(conduit_fill.get_conduit_catalog(ac_standard)))
    reserve = d2.number_input("Reserva futura (%)", 0.0, 50.0, 0.0)
    d_temp = d3.number_input("Temp. Amb (°C)", -40.0, 150.0, 30.0, key="duct_temp")
    application = d4.selectbox("Aplicación", list(conduit_fill.get_application_temps(ac_standard)), index=1)
    e1, e2 = st.columns([2, 1])
    method = e1.selectbox("Instalación", list(conduit_fill.INSTALLATION_METHODS))
    sizes = [c.trade_size for c in conduit_fill.get_conduit_catalog(ac_standard)[conduit_type]]
    conduit_size = e2.selectbox("Tamaño", [None] + sizes, format_func=lambda s: "Automático" if s is None else s)

    if st.button("Calcular Ducto", type="primary", use_container_width=True):
        wires = [
            WireEntry(str(r["Calibre"]), int(r["Cantidad"]), str(r["Aislamiento"]).upper(),
                      StandardId(r["Norma calibre"]) if isinstance(r["Norma calibre"], str) else None)
            for _, r in wires_df.dropna(subset=["Calibre"]).iterrows()
        ]
        inp = ConduitFillInput(
            wires=wires, conduit_type=conduit_type, standard=ac_standard, future_fill_reserve=reserve,
            ambient_temperature=d_temp, application=application, installation_method=method,
            conduit_size=conduit_size,
        )
        res = run(router.size_conduit_fill, inp)
        if res:
            m1, m2, m3 = st.columns(3)
            m1.metric("Ducto", f"{res.conduit_type} {res.trade_size}")
            m2.metric("Llenado", f"{res.fill_percent:.1f}%", help=res.fill_rule)
            m3.metric("Área cables", f"{res.total_wire_area:.4f} {res.area_unit}")

            detail = pd.DataFrame([w.__dict__ for w in res.wires])
            st.dataframe(detail, use_container_width=True)
            options = pd.DataFrame([a.__dict__ for a in res.alternatives])
            st.dataframe(options, use_container_width=True)
            st.dataframe(compliance_df(res.compliance), use_container_width=True)
            st.caption(res.reference)
            show_download({"Ducto": detail, "Tamaños": options}, "memoria_ducto.xlsx")

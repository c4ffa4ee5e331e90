import time

import streamlit as st

from fixedloom.chudnovsky import of_pi, series_terms
from fixedloom.decimal_value import DecimalValue
from fixedloom.errors import FixedLoomError
from fixedloom.rounding import RoundingMode
from fixedloom.verify import matching_digits, reference_pi


_OPERATIONS = ["add", "subtract", "multiply", "divide", "remainder", "sqrt", "log", "pow"]


def _style():
    st.markdown(
        """
        <style>
        :root {--brand:#0ea5e9;--bg0:#0b132b;--bg1:#16213e;--fg:#e5e7eb}
        .stApp {background: linear-gradient(180deg, var(--bg0), var(--bg1))}
        .title {font-weight: 800; font-size: 28px; color: white}
        .subtitle {color: var(--fg); opacity:.8; margin-top: 6px}
        </style>
        """,
        unsafe_allow_html=True,
    )


def _header():
    st.markdown(
        '<div class="title">FixedLoom</div><div class="subtitle">Fixed-scale decimals and Chudnovsky π</div>',
        unsafe_allow_html=True,
    )


def _cli_command(scale: int, verify: bool) -> str:
    parts = ["fixedloom", "pi", "--scale", str(int(scale))]
    if verify:
        parts.append("--verify")
    return " ".join(parts)


def _pi_mode():
    with st.sidebar:
        scale = st.number_input("Scale (digits after point)", min_value=0, max_value=200_000, value=1000, step=100)
        verify = st.checkbox("Verify against reference", value=False)
        filename = st.text_input("Filename stem", value="pi")
        generate = st.button("Generate", type="primary", use_container_width=True)
    if not generate:
        st.caption("Very large scales use proportionally more memory and CPU.")
        return
    t0 = time.perf_counter()
    value = of_pi(int(scale))
    t1 = time.perf_counter()
    display = str(value)
    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Scale", f"{int(scale):,}")
    with col2:
        st.metric("Series terms", f"{series_terms(int(scale)):,}")
    with col3:
        st.metric("Time", f"{t1 - t0:.3f}s")
    if verify:
        expected, kind = reference_pi(int(scale))
        if value == expected:
            st.success(f"Verification passed ({kind})")
        else:
            st.error(f"Verification failed ({kind}): {matching_digits(value, expected):,} digits agree")
    st.code(display[:5000] + ("\n…" if len(display) > 5000 else ""), language="text")
    st.download_button("Download", data=display.encode("ascii"), file_name=f"{filename}.txt", mime="text/plain", use_container_width=True)
    st.code(_cli_command(scale, verify), language="bash")


def _calculator_mode():
    with st.sidebar:
        scale = st.number_input("Scale", min_value=0, max_value=10_000, value=2, step=1)
        rounding = st.selectbox("Rounding", options=[m.name for m in RoundingMode], index=0)
        operation = st.selectbox("Operation", options=_OPERATIONS, index=0)
    left = st.text_input("Left operand", value="99.99")
    right = ""
    exponent = 2
    if operation == "pow":
        exponent = st.number_input("Exponent", min_value=0, max_value=10_000, value=2, step=1)
    elif operation not in {"sqrt", "log"}:
        right = st.text_input("Right operand", value="0.01")
    if not st.button("Compute", type="primary"):
        return
    mode = RoundingMode.parse(rounding)
    try:
        a = DecimalValue.value_of(left, int(scale), mode)
        if operation in {"sqrt", "log"}:
            result = getattr(a, operation)(mode)
        elif operation == "pow":
            result = a.pow(int(exponent), mode)
        else:
            b = DecimalValue.value_of(right, int(scale), mode)
            result = getattr(a, operation)(b, mode)
    except FixedLoomError as e:
        st.error(f"{type(e).__name__}: {e}")
        return
    st.code(str(result), language="text")


def main():
    st.set_page_config(page_title="FixedLoom", page_icon="🧮", layout="wide")
    _style()
    _header()
    with st.sidebar:
        mode = st.radio("Mode", options=["π digits", "Calculator"], index=0)
        st.divider()
    if mode == "π digits":
        _pi_mode()
    else:
        _calculator_mode()


if __name__ == "__main__":
    main()

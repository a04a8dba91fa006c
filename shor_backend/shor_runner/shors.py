import os
import sys

# Add project root to path so the page runs with `streamlit run`
parent_dir = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..'))
if parent_dir not in sys.path:
    sys.path.insert(0, parent_dir)

import time

import streamlit as st
from dotenv import load_dotenv

from shor_backend.backend_config import SUPPORTED_LANGUAGES, configure_logging, get_settings
from shor_backend.locales import (
    ExplanationTopic,
    error_message,
    explanation,
    status_label,
    text,
    translate,
)
from shor_backend.shor_runner.attempt import AttemptStatus
from shor_backend.shor_runner.circuit_diagram import draw_png
from shor_backend.shor_runner.random_source import get_random_source
from shor_backend.shor_runner.sequencer import run_factorization_attempts

load_dotenv()
settings = get_settings()
configure_logging(settings.log_level)

LANGUAGE_NAMES = {"en": "English", "zh": "中文"}
STATUS_ICONS = {
    AttemptStatus.RUNNING: "⏳",
    AttemptStatus.FAILED: "❌",
    AttemptStatus.SUCCESS: "✅",
}


@st.cache_data(show_spinner=False)
def circuit_image(n, a, t):
    return draw_png(n, a=a, t=t)


def explain(topic, lang):
    info = explanation(topic, lang)
    with st.expander(f"ℹ️ {info['title']}"):
        st.markdown(info["content"])


def yes_no(flag, lang):
    return text("yes" if flag else "no", lang)


# -------------------------
# ATTEMPT CARD
# -------------------------
def render_attempt(record, lang, show_explanations=False):
    n, a = record.n, record.base
    st.subheader(
        f"{STATUS_ICONS[record.status]} {text('attempt_title', lang, id=record.id)}"
        f" · {status_label(record.status, lang)}"
    )

    # Step 1: base and gcd
    st.markdown(f"**1. {text('step1_title', lang)}**")
    st.markdown(f"{text('step1_chosen_base', lang)}: `a = {a}`")
    if record.gcd_check is not None:
        st.markdown(f"{text('step1_checking_gcd', lang)}: `gcd({a}, {n}) = {record.gcd_check}`")
    if show_explanations:
        explain(ExplanationTopic.COPRIME_SELECTION, lang)

    # Step 2: simulated quantum measurement
    if record.measurement is not None:
        c, q, t = record.measurement
        st.markdown(f"**2. {text('step2_title', lang)}**")
        st.markdown(text("step2_description", lang, a=a, n=n))
        st.markdown(text("step2_measurement", lang, c=c, t=t, q=q))
        st.caption(
            f"{text('circuit_diagram_title', lang)}: "
            f"{text('circuit_qubits', lang, count=t)} + "
            f"{text('circuit_qubits', lang, count=(n - 1).bit_length())}"
        )
        st.image(circuit_image(n, a, t))
        if show_explanations:
            explain(ExplanationTopic.QUANTUM_PERIOD_FINDING, lang)
            explain(ExplanationTopic.QUANTUM_CIRCUIT, lang)

    # Step 3: continued fractions
    if record.convergents is not None:
        st.markdown(f"**3. {text('step3_title', lang)}**")
        st.markdown(text("step3_description", lang))
        rows = []
        for k, conv in enumerate(record.convergents):
            marker = "⬅" if conv.denominator == record.period_candidate else ""
            rows.append({
                "k": k,
                "a_k": conv.a,
                text("table_header_convergent", lang): f"{conv.numerator}/{conv.denominator}",
                text("table_header_denominator", lang): conv.denominator,
                "": marker,
            })
        st.table(rows)
        st.caption(f"{text('table_best_candidate', lang)}: r = {record.period_candidate}")
        if show_explanations:
            explain(ExplanationTopic.CONTINUED_FRACTIONS, lang)

    # Step 4: verification
    if record.verification is not None:
        st.markdown(f"**4. {text('step4_title', lang)}**")
        st.markdown(text("step4_description", lang, r=record.period))
        st.markdown(f"- {text('step4_is_odd', lang)} **{yes_no(record.verification.is_odd, lang)}**")
        if not record.verification.is_odd:
            st.markdown(
                f"- {text('step4_is_trivial', lang)} **{yes_no(record.verification.is_trivial, lang)}**"
            )
        if show_explanations:
            explain(ExplanationTopic.PERIOD_VERIFICATION, lang)

    # Step 5: factors
    if record.factorization is not None:
        term, p1, p2 = record.factorization
        st.markdown(f"**5. {text('step5_title', lang)}**")
        st.markdown(text("step5_description", lang, a=a))
        st.markdown(f"""
- {text('step5_term', lang)}: `{a}^({record.period}/2) mod {n} = {term}`
- {text('step5_factor1', lang)}: `gcd({term} - 1, {n}) = {p1}`
- {text('step5_factor2', lang)}: `gcd({term} + 1, {n}) = {p2}`
""")
        if show_explanations:
            explain(ExplanationTopic.FINAL_FACTOR_CALCULATION, lang)

    if record.status is AttemptStatus.SUCCESS:
        f1, f2 = record.factors
        st.success(
            f"**{text('step5_success', lang)}**: {text('step5_found_factors', lang, f1=f1, f2=f2)}. "
            f"{text('step5_check', lang)} {f1} × {f2} = {f1 * f2}"
        )
    elif record.status is AttemptStatus.FAILED:
        st.error(f"**{text('attempt_failed', lang)}**: {error_message(record.error, lang)}")


def run_explorer(n, lang):
    factor_session = run_factorization_attempts(
        n,
        rng=get_random_source(settings.rng_seed),
        max_attempts=settings.max_attempts,
    )
    status_line = st.empty()
    status_line.info(f"{text('running_factorization', lang, n=n)} {text('simulating_quantum', lang)}")

    cards = {}
    with st.spinner(text('button_running', lang)):
        for index, record in enumerate(factor_session):
            if index and settings.step_delay:
                time.sleep(settings.step_delay)  # Pause for UI animation
            if record.id not in cards:
                cards[record.id] = st.empty()
            with cards[record.id].container(border=True):
                render_attempt(record, lang, show_explanations=record.is_terminal)

    status_line.empty()
    st.divider()
    if factor_session.factors:
        p, q = factor_session.factors
        st.success(f"🔓 {text('factorization_complete', lang)}")
        st.latex(f"{p} \\times {q} = {n}")
    else:
        st.warning(
            f"**{text('factorization_failed', lang)}**: "
            f"{text('factorization_failed_message', lang, n=n)}"
        )


# -------------------------
# PAGE
# -------------------------
def main():
    st.set_page_config(page_title="Shor's Algorithm Explorer", layout="centered")

    default_index = SUPPORTED_LANGUAGES.index(settings.default_language)
    lang = st.sidebar.radio(
        "Language / 语言",
        SUPPORTED_LANGUAGES,
        index=default_index,
        format_func=LANGUAGE_NAMES.get,
    )
    labels = translate(lang)

    st.title(f"🔓 {labels['title']}")
    st.markdown(labels["subtitle"])
    explain(ExplanationTopic.SHOR_INTRO, lang)

    st.divider()

    n = st.number_input(
        labels["form_label"],
        min_value=settings.min_n,
        max_value=settings.max_n,
        value=min(max(91, settings.min_n), settings.max_n),
        step=1,
        help=labels["form_placeholder"],
    )
    st.caption(labels["form_hint"])

    if not st.button(labels["button_start"], type="primary"):
        return

    n = int(n)
    if n % 2 == 0:
        st.error(f"**{labels['error_label']}**: {labels['error_number_even']}")
        st.latex(f"2 \\times {n // 2} = {n}")
        return

    run_explorer(n, lang)


main()

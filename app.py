import time
from copy import deepcopy

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from roi_engine.aggregate import (
    AggregateResult,
    breakdown_frame,
    live_preview,
    result_branch,
)
from roi_engine.animation import ANIMATED_FIELDS, RevealAnimation
from roi_engine.catalog import UnmappedSelectionError, display_options, validate_catalog
from roi_engine.content import (
    CONSOLIDATION_BENEFITS,
    INCLUDED_FEATURES,
    PRODUCT_NAME,
    TEAM_SIZE_QUESTION,
    TIER_LABELS,
    category_label,
    option_label,
    question_title,
    result_copy,
)
from roi_engine.defaults import DEFAULTS, QUICK_ESTIMATE_DEFAULTS, TEAM_SIZE_MAX, TEAM_SIZE_MIN
from roi_engine.input_metadata import advisory_warnings, help_with_guidance
from roi_engine.integrity_checks import run_integrity_checks
from roi_engine.quick_estimate import SLIDER_BOUNDS, estimate_quick_savings
from roi_engine.reveal import reveal_message, validate_messages
from roi_engine.runtime_logging import (
    append_runtime_event,
    install_global_exception_logging,
    read_runtime_events,
    runtime_log_path,
)
from roi_engine.sensitivity import run_team_size_sweep
from roi_engine.tiers import tier_name
from roi_engine.wizard import RESULTS_STATE, TOTAL_STEPS, Wizard


install_global_exception_logging()
validate_catalog()
validate_messages()


UI_DEFAULTS = {
    "animate_results": True,
    "runtime_log_limit": 50,
    "capture_open": False,
    "capture_submitted": False,
    "_capture_prompted_run": 0,
    "_reveal_run": 0,
    "_integrity_log_signature": "",
}


def _new_wizard() -> Wizard:
    wizard = Wizard(team_size=DEFAULTS["team_size"])
    animation = st.session_state["reveal_animation"]
    wizard.subscribe(animation.on_transition(wizard.result))
    wizard.subscribe(_on_wizard_transition)
    return wizard


def _on_wizard_transition(previous: str, current: str) -> None:
    if current == RESULTS_STATE:
        st.session_state["_reveal_run"] += 1
        st.session_state["capture_open"] = False
        append_runtime_event(
            level="INFO",
            event="results_revealed",
            message="Results view entered.",
            context={"run": st.session_state["_reveal_run"]},
        )


def _wizard() -> Wizard:
    return st.session_state["wizard"]


def _go_next() -> None:
    wizard = _wizard()
    state_before = wizard.state
    if not wizard.next():
        append_runtime_event(
            level="WARNING",
            event="wizard_transition_rejected",
            message="Next was requested before the current step was answered.",
            context={"state": state_before},
        )


def _go_back() -> None:
    wizard = _wizard()
    state_before = wizard.state
    if not wizard.back():
        append_runtime_event(
            level="WARNING",
            event="wizard_transition_rejected",
            message="Back was requested from the first step.",
            context={"state": state_before},
        )


def _start_over() -> None:
    wizard = _wizard()
    wizard.reset()
    st.session_state["reveal_animation"].cancel()
    for key in list(st.session_state.keys()):
        if str(key).startswith("answer_"):
            del st.session_state[key]
    st.session_state["team_size_input"] = wizard.selection.team_size
    st.session_state["capture_open"] = False
    st.session_state["capture_submitted"] = False


def _open_capture() -> None:
    st.session_state["capture_open"] = True


def _store_answer(widget_key: str, category) -> None:
    value = st.session_state.get(widget_key)
    if value is not None:
        _wizard().set_answer(category, value)


def _store_team_size() -> None:
    size = _wizard().set_team_size(st.session_state["team_size_input"])
    st.session_state["team_size_input"] = size


def _fmt_money(value: float) -> str:
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.0f}"


def _fmt_hours(value: float) -> str:
    return f"{value:,.1f}".rstrip("0").rstrip(".")


def _render_team_size_step(wizard: Wizard) -> None:
    st.subheader(TEAM_SIZE_QUESTION["title"])
    st.session_state.setdefault("team_size_input", wizard.selection.team_size)
    st.slider(
        "Employees",
        min_value=TEAM_SIZE_MIN,
        max_value=TEAM_SIZE_MAX,
        step=1,
        key="team_size_input",
        on_change=_store_team_size,
        help=help_with_guidance("team_size", TEAM_SIZE_QUESTION["description"]),
    )
    for warning in advisory_warnings({"team_size": wizard.selection.team_size}):
        st.caption(warning)
    st.caption(TIER_LABELS[tier_name(wizard.selection.team_size)])


def _render_category_step(wizard: Wizard) -> None:
    category = wizard.current_category
    widget_key = f"answer_{category.value}"
    if widget_key not in st.session_state:
        st.session_state[widget_key] = wizard.selection.answer(category)
    st.subheader(question_title(category))
    st.radio(
        category_label(category),
        options=list(display_options(category)),
        index=None,
        format_func=lambda opt, cat=category: option_label(cat, opt),
        key=widget_key,
        on_change=_store_answer,
        args=(widget_key, category),
    )
    answer = wizard.selection.answer(category)
    if answer is not None:
        message = reveal_message(category, answer)
        if message:
            st.warning(message)


def _render_navigation(wizard: Wizard) -> None:
    prev_col, next_col = st.columns(2)
    prev_col.button(
        "Previous",
        on_click=_go_back,
        disabled=wizard.step_number == 1,
        key="nav_previous",
    )
    next_label = "See My Results" if wizard.step_number == TOTAL_STEPS else "Next"
    next_col.button(
        next_label,
        on_click=_go_next,
        disabled=not wizard.can_advance(),
        type="primary",
        key="nav_next",
    )


def _render_live_preview(result: AggregateResult) -> None:
    preview = live_preview(result)
    if preview is None:
        return
    with st.container(border=True):
        c1, c2 = st.columns(2)
        c1.metric(result_copy("current_waste"), f"{_fmt_money(preview['current_waste'])}/mo")
        if "potential_savings" in preview:
            c2.metric(result_copy("potential_savings"), f"{_fmt_money(preview['potential_savings'])}/mo")


def _render_headline(values: dict, result: AggregateResult, placeholder) -> None:
    with placeholder.container():
        st.caption(result_copy("wasting_title"))
        st.header(f"{_fmt_money(values['total_current_spending'])}/month")
        c1, c2, c3, c4, c5 = st.columns(5)
        c1.metric("Monthly Savings", _fmt_money(values["monthly_savings"]))
        c2.metric("Annual Savings", _fmt_money(values["annual_savings"]))
        c3.metric("ROI", f"{values['roi_percent']:,.0f}%")
        c4.metric("Time Recovered", f"{_fmt_hours(values['hours_recovered_monthly'])} hrs/mo")
        c5.metric(f"{PRODUCT_NAME} Plan", f"{_fmt_money(result.tier_cost)}/mo")


def _render_cost_cards(result: AggregateResult) -> None:
    current_col, product_col = st.columns(2)
    with current_col.container(border=True):
        st.markdown("**Current Costs**")
        st.write(f"Direct tool costs: {_fmt_money(result.total_direct_cost)}/mo")
        st.write(f"Hidden admin waste: {_fmt_money(result.total_hidden_cost)}/mo")
        st.write(f"**Total: {_fmt_money(result.total_current_spending)}/mo**")
        st.write(
            f"Recovered time is worth {_fmt_money(result.value_of_time_recovered)}/year "
            f"({_fmt_hours(result.hours_recovered_annually)} hrs)."
        )
    with product_col.container(border=True):
        st.markdown(f"**{PRODUCT_NAME}: {_fmt_money(result.tier_cost)}/mo**")
        st.caption(TIER_LABELS[tier_name(result.team_size)])
        for feature in INCLUDED_FEATURES:
            st.write(f"- {feature}")


def _render_results_charts(result: AggregateResult, wizard: Wizard) -> None:
    fig = go.Figure()
    fig.add_trace(go.Bar(name="Direct tool costs", x=["Current setup"], y=[result.total_direct_cost]))
    fig.add_trace(go.Bar(name="Hidden admin waste", x=["Current setup"], y=[result.total_hidden_cost]))
    fig.add_trace(go.Bar(name=PRODUCT_NAME, x=[PRODUCT_NAME], y=[result.tier_cost]))
    fig.update_layout(barmode="stack", title="Monthly Cost Comparison", yaxis_title="USD / month")
    st.plotly_chart(fig, width="stretch")

    sweep = run_team_size_sweep(wizard.selection)
    st.plotly_chart(
        px.line(
            sweep,
            x="Team Size",
            y=["Current Spending", "Tier Cost", "Monthly Savings"],
            line_shape="hv",
            title="Monthly Savings by Team Size",
        ),
        width="stretch",
    )


def _render_breakdown(result: AggregateResult) -> None:
    with st.expander("Show Detailed Breakdown", expanded=False):
        df = breakdown_frame(result)
        if df.empty:
            st.caption("No answers recorded.")
            return
        display = df.copy()
        for col in ("Direct Cost", "Hidden Cost"):
            display[col] = display[col].map(lambda v: f"{_fmt_money(v)}/mo" if v else "")
        display["Hours Wasted"] = display["Hours Wasted"].map(lambda v: f"{_fmt_hours(v)} hrs/mo" if v else "")
        st.dataframe(display, width="stretch", hide_index=True)


def _render_capture_form(result: AggregateResult) -> None:
    with st.container(border=True):
        st.subheader(result_copy("capture_title", savings=max(result.annual_savings, 0)))
        st.caption(result_copy("capture_description"))
        if st.session_state["capture_submitted"]:
            st.success("Thanks! Your analysis is on its way.")
            return
        with st.form("capture_form"):
            email = st.text_input("Email address", placeholder="you@company.com")
            submitted = st.form_submit_button("Send My Analysis")
        if submitted:
            if "@" not in email:
                st.warning("Enter a valid email address.")
                return
            st.session_state["capture_submitted"] = True
            append_runtime_event(
                level="INFO",
                event="capture_submitted",
                message="Savings analysis requested.",
                context={"annual_savings": result.annual_savings, "team_size": result.team_size},
            )
            st.success("Thanks! Your analysis is on its way.")


def _log_integrity_findings(result: AggregateResult, wizard: Wizard) -> None:
    findings = run_integrity_checks(result, wizard.selection)
    if not findings:
        return
    signature = repr([f["Check"] for f in findings])
    if signature != st.session_state["_integrity_log_signature"]:
        st.session_state["_integrity_log_signature"] = signature
        append_runtime_event(
            level="ERROR",
            event="integrity_findings",
            message="Savings result failed integrity checks.",
            context={"findings": findings},
        )
    st.error("The savings estimate failed internal consistency checks.")
    st.dataframe(pd.DataFrame(findings), width="stretch", hide_index=True)


def _render_results(wizard: Wizard, result: AggregateResult) -> None:
    branch = result_branch(result, wizard.selection)
    if branch == "savings":
        placeholder = st.empty()
        handle = st.session_state["reveal_animation"].handle
        if handle is not None and handle.active:
            if st.session_state["animate_results"]:
                _render_headline(handle.values(), result, placeholder)
                handle.run(lambda frame: _render_headline(frame, result, placeholder), sleep=time.sleep)
            else:
                while handle.tick() is not None:
                    pass
        _render_headline({name: getattr(result, name) for name in ANIMATED_FIELDS}, result, placeholder)

        run_id = st.session_state["_reveal_run"]
        if handle is not None and handle.capture_prompt and st.session_state["_capture_prompted_run"] != run_id:
            st.session_state["_capture_prompted_run"] = run_id
            st.session_state["capture_open"] = True
            append_runtime_event(
                level="INFO",
                event="capture_prompt_shown",
                message="Annual savings exceeded the capture threshold.",
                context={"annual_savings": result.annual_savings},
            )
        _render_cost_cards(result)
        _render_results_charts(result, wizard)
    else:
        st.success(result_copy("already_optimized"))
        if branch == "consolidate":
            st.write(result_copy("consolidate_message", cost=result.total_direct_cost, tier_cost=result.tier_cost))
            st.write(result_copy("consolidate_benefits"))
            for benefit in CONSOLIDATION_BENEFITS:
                st.write(f"- {benefit}")
        else:
            st.write(result_copy("current_setup_good"))

    _render_breakdown(result)
    _log_integrity_findings(result, wizard)

    c1, c2, c3 = st.columns(3)
    c1.button("Back to Questions", on_click=_go_back, key="nav_back_to_questions")
    c2.button("Email My Analysis", on_click=_open_capture, key="open_capture")
    c3.button("Start Over", on_click=_start_over, key="start_over")
    if st.session_state["capture_open"]:
        _render_capture_form(result)


def _render_quick_estimate() -> None:
    st.subheader("Quick Savings Estimate")
    st.caption("Adjust the sliders to match your business.")
    values = {}
    for key, label in [
        ("technicians", "Number of Technicians"),
        ("projects_per_month", "Projects per Month"),
        ("avg_hourly_rate", "Average Billable Rate ($/hr)"),
        ("admin_hours_per_week", "Admin Hours per Week"),
    ]:
        bounds = SLIDER_BOUNDS[key]
        values[key] = st.slider(
            label,
            min_value=bounds["min"],
            max_value=bounds["max"],
            step=bounds["step"],
            value=QUICK_ESTIMATE_DEFAULTS[key],
            key=f"quick_{key}",
            help=help_with_guidance(key, label + "."),
        )
    estimate = estimate_quick_savings(**values)
    st.metric("Estimated Annual Savings", _fmt_money(estimate.total))
    c1, c2, c3 = st.columns(3)
    c1.metric("Admin Time", _fmt_money(estimate.admin_time))
    c2.metric("Payroll Error Reduction", _fmt_money(estimate.payroll_errors))
    c3.metric("Billable Capture", _fmt_money(estimate.billable_capture))
    st.caption(
        "Admin time savings assume a 40% reduction in paperwork and scheduling tasks. "
        "Payroll error reduction is estimated at 2% of total payroll costs. "
        "Billable capture assumes recovering 5% of previously unbilled work through accurate time tracking."
    )


def _display_runtime_diagnostics() -> None:
    with st.sidebar.expander("Runtime Diagnostics", expanded=False):
        st.toggle("Animate results", key="animate_results")
        st.number_input("Events to show", min_value=10, max_value=500, step=10, key="runtime_log_limit")
        st.caption(f"Log file: {runtime_log_path()}")
        events = read_runtime_events(limit=int(st.session_state["runtime_log_limit"]))
        if events:
            st.dataframe(
                pd.DataFrame(events)[["timestamp_utc", "level", "event", "message"]],
                width="stretch",
                hide_index=True,
            )
        else:
            st.caption("No runtime events recorded.")


st.set_page_config(page_title=f"{PRODUCT_NAME} Savings Calculator", layout="centered")
st.title(result_copy("title"))
st.caption(result_copy("subtitle"))

for k, v in UI_DEFAULTS.items():
    st.session_state.setdefault(k, deepcopy(v))
if "reveal_animation" not in st.session_state:
    st.session_state["reveal_animation"] = RevealAnimation(
        duration_ms=DEFAULTS["animation_duration_ms"], ticks=DEFAULTS["animation_ticks"]
    )
if "wizard" not in st.session_state:
    st.session_state["wizard"] = _new_wizard()

_display_runtime_diagnostics()

calculator_tab, quick_tab = st.tabs(["Savings Calculator", "Quick Estimate"])

with calculator_tab:
    wizard = _wizard()
    try:
        current_result = wizard.result()
    except UnmappedSelectionError as exc:
        append_runtime_event(
            level="ERROR",
            event="unmapped_selection",
            message=str(exc),
            context={"state": wizard.state},
            exc=exc,
        )
        st.error(f"This answer is not configured in the cost model: {exc}")
        st.stop()

    if wizard.in_results:
        _render_results(wizard, current_result)
    else:
        st.progress(wizard.progress, text=f"Step {wizard.step_number} of {TOTAL_STEPS} ({wizard.progress:.0%})")
        with st.container(border=True):
            if wizard.current_category is None:
                _render_team_size_step(wizard)
            else:
                _render_category_step(wizard)
            _render_navigation(wizard)
        _render_live_preview(current_result)

with quick_tab:
    _render_quick_estimate()

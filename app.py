import logging

import numpy as np
import pandas as pd
import streamlit as st

from gradepoint import (
    GradePointError,
    PreviousRecord,
    calculate,
    convert_units,
    get_rule_set,
    list_rule_sets,
    plan_scenarios,
)
from gradepoint.config import DEFAULT_RULE_SET_ID, LOG_LEVEL, OVERALL
from gradepoint.display import format_credits, format_gpa, result_frame
from gradepoint.io_csv import example_courses, parse_courses, read_csv_upload, validate_courses_csv

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

# ------------------------
# Streamlit UI (with optional CSV upload)
# ------------------------

st.set_page_config(
    page_title="GPA Calculator | Weighted GPA, Standing & Eligibility",
    page_icon="🎓",
    layout="wide",
)

st.title("🎓 GPA Calculator")
st.write(
    "Credit-weighted GPA for a range of institution and program rules: overall and "
    "per-category GPAs, academic standing, honors and admission thresholds."
)

RULE_SET_OPTIONS = dict((name, rs_id) for rs_id, name in list_rule_sets())
rule_set_names = list(RULE_SET_OPTIONS)
default_index = list(RULE_SET_OPTIONS.values()).index(DEFAULT_RULE_SET_ID)

# ------------------------
# Input form
# ------------------------

with st.form("gpa_input_form"):
    st.subheader("1. Choose your rules")
    rule_set_name = st.selectbox("Institution / program", rule_set_names, index=default_index)
    rule_set = get_rule_set(RULE_SET_OPTIONS[rule_set_name])

    st.caption(
        f"Grades: {', '.join(rule_set.scale.grades)} · "
        f"Categories: {', '.join(rule_set.categories) or 'none'} · "
        f"Credits per course: {rule_set.min_credits:g} to {rule_set.max_credits:g} "
        f"({rule_set.unit_system} units)"
    )

    st.subheader("2. Enter your courses")
    courses_csv = st.file_uploader(
        "Optionally upload courses CSV (Grade, Credits, Categories, Name, Course_Key, Course_Type)",
        type=["csv"],
        key="courses_csv",
    )

    courses_seed = example_courses()
    upload_error = None
    if courses_csv is not None:
        try:
            courses_seed = validate_courses_csv(read_csv_upload(courses_csv))
        except ValueError as e:
            upload_error = str(e)

    if upload_error:
        st.error(f"Courses CSV error: {upload_error}")

    courses_df = st.data_editor(
        courses_seed,
        key="courses_df",
        num_rows="dynamic",
        use_container_width=True,
        column_config={
            "id": st.column_config.TextColumn("ID"),
            "grade": st.column_config.TextColumn("Grade"),
            "credits": st.column_config.NumberColumn(
                "Credits",
                min_value=0.0,
                step=0.5,
                format="%.1f",
            ),
            "categories": st.column_config.TextColumn("Categories (separate with ;)"),
            "course_key": st.column_config.TextColumn(
                "Course key",
                help="Give repeated attempts of one course the same key",
            ),
            "course_type": st.column_config.SelectboxColumn(
                "Course type",
                options=["regular", "honors", "ap", "ib"],
            ),
            "exclude_from_gpa": st.column_config.CheckboxColumn("Pass/no-pass"),
        },
    )

    st.subheader("3. Previous record (optional)")
    p1, p2 = st.columns(2)
    with p1:
        prev_gpa = st.number_input("Previous cumulative GPA", min_value=0.0, step=0.01, value=0.0)
    with p2:
        prev_credits = st.number_input("Previous credits", min_value=0.0, step=1.0, value=0.0)

    strict = st.checkbox("Stop on unrecognised grades", value=False)
    submitted = st.form_submit_button("Calculate", type="primary")


if submitted:
    if courses_csv is not None and upload_error:
        st.warning("Please fix the CSV upload error above (or remove the upload) and try again.")
    else:
        records = parse_courses(courses_df)
        previous = PreviousRecord(prev_gpa, prev_credits) if prev_credits > 0 else None
        try:
            result = calculate(records, rule_set.id, previous=previous, strict=strict)
        except GradePointError as e:
            st.error(str(e))
        else:
            st.session_state["result"] = result
            st.session_state["rule_set_id"] = rule_set.id


# ------------------------
# Show result if we have it
# ------------------------

if "result" in st.session_state:
    result = st.session_state["result"]
    shown_rules = get_rule_set(st.session_state["rule_set_id"])
    overall = result.by_category[OVERALL]

    st.markdown("---")
    st.subheader("Results")

    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("Cumulative GPA", format_gpa(overall.gpa))
    with col2:
        st.metric("GPA credits", format_credits(overall.credits))
    with col3:
        st.metric("Units attempted", format_credits(result.units_attempted))
    with col4:
        st.metric("Standing", result.standing)

    if result.honors is not None:
        st.info(f"Honors: **{result.honors}**")

    st.dataframe(result_frame(result), use_container_width=True, hide_index=True)

    for gate in shown_rules.gates:
        if result.eligibility[gate.key]:
            st.success(f"✅ {gate.label}")
        else:
            st.error(f"❌ {gate.label}")

    for table in shown_rules.tiers:
        st.metric(table.label, result.tiers[table.key])

    for w in result.warnings:
        st.warning(w.message)

    # ------------------------------
    # Target planner
    # ------------------------------
    st.markdown("---")
    st.subheader("What do I need to raise my GPA?")
    t1, t2 = st.columns(2)
    with t1:
        target_gpa = st.number_input(
            "Target GPA",
            min_value=0.0,
            max_value=float(shown_rules.max_points),
            step=0.01,
            value=float(min(shown_rules.max_points, 3.5)),
        )
    with t2:
        planned_credits = st.number_input("Credits you plan to take", min_value=0.0, step=1.0, value=15.0)

    scenarios = plan_scenarios(
        overall.gpa,
        overall.credits,
        target_gpa,
        planned_credits,
        max_points=shown_rules.max_points,
    )
    plan_df = pd.DataFrame(scenarios)
    plan_df["required_average"] = plan_df["required_average"].map(
        lambda x: np.nan if x is None else round(max(x, 0.0), 2)
    )
    st.dataframe(plan_df, use_container_width=True, hide_index=True)
else:
    st.info("Fill in your courses and click **Calculate** to get started.")


# ------------------------------
# Unit converter
# ------------------------------
st.markdown("---")
st.subheader("Quarter ↔ semester units")
u1, u2 = st.columns(2)
with u1:
    quarter_units = st.number_input("Quarter units", min_value=0.0, step=1.0, value=180.0)
    st.write(f"= **{convert_units(quarter_units, 'quarter', 'semester'):.1f}** semester units")
with u2:
    semester_units = st.number_input("Semester units", min_value=0.0, step=1.0, value=120.0)
    st.write(f"= **{convert_units(semester_units, 'semester', 'quarter'):.1f}** quarter units")


st.header("FAQ")

st.subheader("How is GPA calculated?")
st.write(
    "Each course's grade points are multiplied by its credits, the products are summed, "
    "and the sum is divided by the total GPA credits. Pass/no-pass, withdrawn and "
    "incomplete grades earn credit but carry no grade points."
)

st.subheader("Are honors cutoffs rounded?")
st.write(
    "No. Your GPA is compared to every threshold at full precision. A 3.9349 does not "
    "reach a 3.935 cutoff even though both display as 3.93 or 3.94."
)

st.subheader("What happens to repeated courses?")
st.write(
    "That depends on the rules you pick. Some count every attempt, others keep only the "
    "latest or the highest grade. Give repeated attempts the same course key in your CSV "
    "so they are matched."
)

st.subheader("What data do you collect or store?")
st.write(
    "This tool does **not** store, save, or transmit your data. "
    "All grades and credits you enter are processed **in your browser session** "
    "and are cleared when you refresh or close the page."
)

st.subheader("Does this tool guarantee my official GPA?")
st.write(
    "No. This calculator is for guidance and planning only. "
    "Official GPAs are determined by your institution or application service."
)

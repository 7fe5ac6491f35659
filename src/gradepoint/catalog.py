"""
Rule-set catalog.

Each institution or program profile is data. Adding a school means adding a
``RuleSet`` here (or registering one built elsewhere with ``build_catalog``),
never touching the aggregator or evaluator.

The module-level registry is a read-only mapping, so one profile object can
be shared by any number of calculators.
"""

from types import MappingProxyType
from typing import Iterable, Mapping, Tuple

from .errors import UnknownRuleSetError
from .rules import Band, EligibilityGate, RepeatPolicy, RuleSet, ThresholdTable
from .scales import LSAC, NO_D_MINUS, STANDARD_PLUS_MINUS, UCLA


def _bands(*pairs) -> Tuple[Band, ...]:
    return tuple(Band(label, lower) for label, lower in pairs)


LATIN_HONORS = ThresholdTable(
    key="honors",
    label="Latin honors",
    bands=_bands(("Summa Cum Laude", 3.9), ("Magna Cum Laude", 3.7), ("Cum Laude", 3.5)),
    below="None",
)

GENERAL_STANDING = ThresholdTable(
    key="standing",
    label="Academic standing",
    bands=_bands(("Dean's List", 3.5), ("Good Standing", 2.0)),
    below="Academic Probation",
)


STANDARD = RuleSet(
    id="standard-4.0-plus-minus",
    name="Standard 4.0 scale with plus/minus grades",
    scale=STANDARD_PLUS_MINUS,
    category_axes={"discipline": ("science", "nonScience")},
    min_credits=0.5,
    max_credits=20.0,
    standing=GENERAL_STANDING,
    honors=LATIN_HONORS,
    gates=(EligibilityGate("deans_list", "Dean's List", {"overall": 3.5}),),
)

LSAC_CAS = RuleSet(
    id="lsac-4.33",
    name="LSAC CAS undergraduate GPA",
    scale=LSAC,
    category_axes={},
    min_credits=0.5,
    max_credits=10.0,
    repeat_policy=RepeatPolicy.INCLUDE_ALL_ATTEMPTS,
    standing=GENERAL_STANDING,
    tiers=(
        ThresholdTable(
            key="law_school",
            label="Law school GPA range",
            bands=_bands(
                ("Top 14 median range", 3.85),
                ("Top 50 median range", 3.6),
                ("Regional median range", 3.3),
            ),
            below="Below most medians",
        ),
    ),
)

# Weighted variant of the LSAC calculator: honors courses earn one extra point,
# failing grades none
LSAC_CAS_WEIGHTED = RuleSet(
    id="lsac-4.33-weighted",
    name="LSAC 4.33 scale, honors-weighted",
    scale=LSAC,
    category_axes={},
    min_credits=0.5,
    max_credits=10.0,
    standing=GENERAL_STANDING,
    course_type_bonus={"honors": 1.0},
)

# AP/IB +1.0, honors +0.5, capped at 5.0; a failing grade still carries the bonus
WEIGHTED_HIGH_SCHOOL = RuleSet(
    id="weighted-high-school",
    name="High school weighted GPA (AP, IB, honors)",
    scale=STANDARD_PLUS_MINUS,
    category_axes={},
    min_credits=0.25,
    max_credits=5.0,
    course_type_bonus={"honors": 0.5, "ap": 1.0, "ib": 1.0},
    bonus_cap=5.0,
    bonus_on_failing=True,
    report_unweighted=True,
    standing=ThresholdTable(
        key="standing",
        label="Honor roll",
        basis="unweighted",
        bands=_bands(("High Honor Roll", 3.7), ("Honor Roll", 3.3), ("Good Standing", 2.0)),
        below="Academic Warning",
    ),
)

UCLA_QUARTER = RuleSet(
    id="ucla-4.0-no-plus-a",
    name="UCLA (quarter units, A+ = 4.0)",
    scale=UCLA,
    category_axes={"scope": ("major",)},
    min_credits=0.5,
    max_credits=12.0,
    unit_system="quarter",
    repeat_policy=RepeatPolicy.REPLACE_WITH_LATEST,
    standing=ThresholdTable(
        key="standing",
        label="Academic standing",
        bands=_bands(("Dean's Honor List", 3.5), ("Good Standing", 2.0)),
        below="Academic Probation",
    ),
    # Cutoffs are applied to the unrounded GPA
    honors=ThresholdTable(
        key="honors",
        label="Latin honors",
        bands=_bands(("Summa Cum Laude", 3.935), ("Magna Cum Laude", 3.753), ("Cum Laude", 3.5)),
        below="None",
    ),
    gates=(EligibilityGate("deans_list", "Dean's List", {"overall": 3.5}),),
)

PHARMACY = RuleSet(
    id="pharmacy-pharmd",
    name="Pharmacy school (pre-pharmacy and PharmD)",
    scale=STANDARD_PLUS_MINUS,
    category_axes={
        "program": ("prePharmacy", "pharmD"),
        "discipline": ("scienceBCPM", "nonScience", "professional"),
    },
    min_credits=0.5,
    max_credits=15.0,
    standing=ThresholdTable(
        key="standing",
        label="Academic standing",
        bands=_bands(
            ("Excellent Standing", 3.7),
            ("High Standing", 3.5),
            ("Good Standing", 3.0),
            ("Academic Warning", 2.7),
        ),
        below="Below Minimum",
    ),
    gates=(
        EligibilityGate("naplex", "NAPLEX eligible", {"overall": 3.0}),
        EligibilityGate("rho_chi", "Rho Chi eligible", {"overall": 3.0}),
        EligibilityGate("rho_chi_competitive", "Rho Chi competitive", {"overall": 3.5}),
        EligibilityGate("rho_chi_highly_competitive", "Rho Chi highly competitive", {"overall": 3.7}),
        EligibilityGate(
            "admission_competitive",
            "Competitive for PharmD admission",
            {"overall": 3.3, "scienceBCPM": 3.3},
        ),
    ),
    tiers=(
        ThresholdTable(
            key="residency",
            label="Residency competitiveness",
            bands=_bands(
                ("Highly Competitive", 3.7),
                ("Competitive", 3.5),
                ("Moderately Competitive", 3.2),
                ("Low Competitive", 3.0),
            ),
            below="Not Competitive",
        ),
    ),
)

GRADUATE = RuleSet(
    id="graduate-4.0",
    name="Graduate school (coursework and research)",
    scale=STANDARD_PLUS_MINUS,
    category_axes={"type": ("coursework", "research")},
    min_credits=0.5,
    max_credits=15.0,
    standing=ThresholdTable(
        key="standing",
        label="Academic standing",
        bands=_bands(("Excellent Standing", 3.5), ("Good Standing", 3.0), ("Academic Probation", 2.7)),
        below="Dismissal Risk",
    ),
    honors=LATIN_HONORS,
    gates=(EligibilityGate("assistantship", "Graduate assistantship", {"overall": 3.0}),),
)

AMCAS = RuleSet(
    id="amcas-bcpm",
    name="AMCAS medical school (BCPM / All Other)",
    scale=STANDARD_PLUS_MINUS,
    category_axes={"discipline": ("bcpm", "ao")},
    min_credits=0.5,
    max_credits=12.0,
    repeat_policy=RepeatPolicy.INCLUDE_ALL_ATTEMPTS,
    count_excluded_in_attempted=False,
    standing=GENERAL_STANDING,
    tiers=(
        ThresholdTable(
            key="md_competitiveness",
            label="MD competitiveness",
            bands=_bands(
                ("Highly Competitive", 3.8),
                ("Competitive", 3.6),
                ("Moderate", 3.4),
                ("Below Average", 3.0),
            ),
            below="Low",
        ),
        ThresholdTable(
            key="bcpm_strength",
            label="BCPM strength",
            basis="bcpm",
            bands=_bands(("Strong", 3.6), ("Solid", 3.2), ("Minimum", 3.0)),
            below="Below Minimum",
        ),
    ),
)

NURSING = RuleSet(
    id="nursing-prerequisite",
    name="Nursing school (prerequisite and science GPA)",
    scale=STANDARD_PLUS_MINUS,
    category_axes={
        "discipline": ("science", "nonScience"),
        "requirement": ("prerequisite",),
    },
    min_credits=0.5,
    max_credits=12.0,
    standing=GENERAL_STANDING,
    gates=(EligibilityGate("bsn_minimum", "Meets BSN prerequisite minimum", {"prerequisite": 3.0}),),
    tiers=(
        ThresholdTable(
            key="bsn_competitiveness",
            label="BSN competitiveness",
            basis="prerequisite",
            bands=_bands(
                ("Highly Competitive", 3.7),
                ("Very Competitive", 3.4),
                ("Competitive", 3.0),
                ("Below Average", 2.7),
            ),
            below="Not Competitive",
        ),
    ),
)

PA_SCHOOL = RuleSet(
    id="pa-school",
    name="Physician assistant programs (CASPA)",
    scale=NO_D_MINUS,
    category_axes={"discipline": ("science", "nonScience")},
    min_credits=0.5,
    max_credits=12.0,
    standing=ThresholdTable(
        key="standing",
        label="Academic standing",
        bands=_bands(
            ("Highly Competitive", 3.7),
            ("Competitive", 3.5),
            ("Moderately Competitive", 3.3),
            ("Meets Minimum", 3.0),
        ),
        below="Below Minimum",
    ),
    gates=(
        EligibilityGate("top_tier", "Top-tier programs", {"overall": 3.6, "science": 3.5}),
        EligibilityGate("highly_competitive", "Highly competitive programs", {"overall": 3.5, "science": 3.4}),
        EligibilityGate("competitive", "Competitive programs", {"overall": 3.4, "science": 3.3}),
        EligibilityGate("less_competitive", "Less competitive programs", {"overall": 3.0, "science": 3.0}),
    ),
)

_VET_BANDS = _bands(("Excellent", 3.6), ("Competitive", 3.5), ("Good", 3.0))

VETERINARY = RuleSet(
    id="veterinary",
    name="Veterinary school (science and last 45 credits)",
    scale=STANDARD_PLUS_MINUS,
    category_axes={"discipline": ("science", "nonScience"), "requirement": ("prerequisite",)},
    min_credits=0.5,
    max_credits=12.0,
    recent_credit_window=45.0,
    standing=GENERAL_STANDING,
    tiers=(
        ThresholdTable("cumulative_tier", "Cumulative GPA", _VET_BANDS, below="Keep Improving"),
        ThresholdTable("science_tier", "Science GPA", _VET_BANDS, basis="science", below="Keep Improving"),
        ThresholdTable("recent_tier", "Last 45 credits GPA", _VET_BANDS, basis="recent", below="Keep Improving"),
    ),
)


def build_catalog(rule_sets: Iterable[RuleSet]) -> Mapping[str, RuleSet]:
    """Index rule sets by id into a read-only mapping."""
    catalog = {}
    for rs in rule_sets:
        if rs.id in catalog:
            raise ValueError(f"Rule set id {rs.id!r} is registered twice.")
        catalog[rs.id] = rs
    return MappingProxyType(catalog)


RULE_SETS = build_catalog([
    STANDARD,
    LSAC_CAS,
    LSAC_CAS_WEIGHTED,
    WEIGHTED_HIGH_SCHOOL,
    UCLA_QUARTER,
    PHARMACY,
    GRADUATE,
    AMCAS,
    NURSING,
    PA_SCHOOL,
    VETERINARY,
])


def get_rule_set(rule_set_id: str, catalog: Mapping[str, RuleSet] = RULE_SETS) -> RuleSet:
    try:
        return catalog[rule_set_id]
    except KeyError:
        raise UnknownRuleSetError(rule_set_id, sorted(catalog)) from None


def list_rule_sets(catalog: Mapping[str, RuleSet] = RULE_SETS):
    """(id, name) pairs, sorted by id."""
    return [(rs_id, catalog[rs_id].name) for rs_id in sorted(catalog)]

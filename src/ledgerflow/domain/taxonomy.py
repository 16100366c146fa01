"""Balance-sheet taxonomy: sections, canonical categories and their ranks."""

from typing import Optional

from ledgerflow.domain.entities import Section

# Display rank of the canonical categories of each section. Categories
# outside this table are ordered after the canonical ones.
CATEGORY_RANKS: dict[Section, dict[str, int]] = {
    Section.ASSET: {
        "Cash and Banks": 1,
        "Investments": 2,
        "Trade Receivables": 3,
        "Other Receivables": 4,
        "Inventories": 5,
        "Property, Plant and Equipment": 6,
        "Intangible Assets": 7,
    },
    Section.LIABILITY: {
        "Trade Payables": 1,
        "Bank Loans": 2,
        "Payroll and Tax Liabilities": 3,
        "Other Liabilities": 4,
        "Provisions": 5,
    },
    Section.EQUITY: {
        "Share Capital": 1,
        "Reserves": 2,
        "Retained Earnings": 3,
    },
}

UNLISTED_RANK = 99

# Income statement categories suggested to the oracle; they carry no rank.
RESULT_CATEGORIES = (
    "Sales",
    "Cost of Sales",
    "Administrative Expenses",
    "Selling Expenses",
    "Financial Results",
)

SECTION_ALIASES: dict[str, Section] = {
    "ASSET": Section.ASSET,
    "ASSETS": Section.ASSET,
    "ACTIVO": Section.ASSET,
    "LIABILITY": Section.LIABILITY,
    "LIABILITIES": Section.LIABILITY,
    "PASIVO": Section.LIABILITY,
    "EQUITY": Section.EQUITY,
    "PATRIMONIO_NETO": Section.EQUITY,
    "REVENUE": Section.REVENUE,
    "INCOME": Section.REVENUE,
    "INGRESOS": Section.REVENUE,
    "EXPENSE": Section.EXPENSE,
    "EXPENSES": Section.EXPENSE,
    "EGRESOS": Section.EXPENSE,
    "UNCLASSIFIED": Section.UNCLASSIFIED,
    "SIN_CLASIFICAR": Section.UNCLASSIFIED,
}


def category_rank(section: Section, category: str) -> Optional[int]:
    """Return the canonical rank of a category, or None if it is unlisted."""
    return CATEGORY_RANKS.get(section, {}).get(category)


def parse_section(label: Optional[str]) -> Section:
    """Parse a section label, falling back to UNCLASSIFIED.

    Accepts enum names in any case, spaces or hyphens in place of
    underscores, and the Spanish chapter names used by CNV charts of
    accounts (e.g. "ACTIVO", "PATRIMONIO_NETO").
    """
    if isinstance(label, Section):
        return label
    if not label:
        return Section.UNCLASSIFIED

    key = str(label).strip().upper().replace(" ", "_").replace("-", "_")
    return SECTION_ALIASES.get(key, Section.UNCLASSIFIED)


def canonical_guidance_text() -> str:
    """Render the default category guidance handed to the oracle."""
    lines = []
    for section, ranks in CATEGORY_RANKS.items():
        names = sorted(ranks, key=ranks.__getitem__)
        lines.append(f"- For {section.value}: " + ", ".join(f'"{n}"' for n in names) + ".")
    lines.append(
        f"- For {Section.REVENUE.value} and {Section.EXPENSE.value}: "
        + ", ".join(f'"{n}"' for n in RESULT_CATEGORIES)
        + "."
    )
    return "\n".join(lines)

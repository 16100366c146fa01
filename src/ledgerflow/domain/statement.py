"""Statement aggregation: grouping classified lines into a balance sheet."""

from collections import defaultdict
from typing import Iterable, Sequence

from ledgerflow.domain.entities import (
    DEFAULT_CATEGORY,
    CategoryGroup,
    Line,
    Section,
    SectionStatement,
    Statement,
)
from ledgerflow.domain.taxonomy import UNLISTED_RANK, category_rank
from ledgerflow.utils.amount_parser import ZERO


def order_categories(
    section: Section, categories: Iterable[str], has_custom_model: bool
) -> list[str]:
    """Order category names of a section for display.

    Canonical categories always come first, by rank. The remaining ones keep
    their discovery order, unless a custom model (client regulations or a
    global standard) is active, in which case they are ordered alphabetically.

    Args:
        section: Section the categories belong to
        categories: Category names in discovery order
        has_custom_model: Whether a custom classification model is active

    Returns:
        Ordered list of category names
    """
    if has_custom_model:

        def sort_key(name: str) -> tuple:
            rank = category_rank(section, name)
            if rank is not None:
                return (0, rank, "", "")
            return (1, 0, name.casefold(), name)

    else:

        def sort_key(name: str) -> tuple:
            rank = category_rank(section, name)
            return (rank if rank is not None else UNLISTED_RANK,)

    # sorted() is stable, so ties keep discovery order
    return sorted(categories, key=sort_key)


def group_section(
    lines: Sequence[Line], section: Section, has_custom_model: bool
) -> SectionStatement:
    """Group the detail lines of one section by category."""
    groups: dict[str, list[Line]] = defaultdict(list)
    for line in lines:
        if line.section != section or line.is_group:
            continue
        groups[line.category or DEFAULT_CATEGORY].append(line)

    category_groups = tuple(
        CategoryGroup(
            name=name,
            lines=tuple(groups[name]),
            total=sum((line.balance for line in groups[name]), ZERO),
        )
        for name in order_categories(section, groups.keys(), has_custom_model)
    )
    return SectionStatement(
        section=section,
        groups=category_groups,
        total=sum((group.total for group in category_groups), ZERO),
    )


def aggregate(lines: Sequence[Line], has_custom_model: bool = False) -> Statement:
    """Build a statement from a full line set.

    Group lines are display artifacts and are left out. Every section,
    Unclassified included, gets an entry so that each detail line appears
    in exactly one category group.

    The net period result takes revenue and expense totals in absolute value,
    so it is sign-correct whichever sign convention the source used.

    Args:
        lines: Current classified line set
        has_custom_model: Whether a custom classification model is active

    Returns:
        Statement with section groups and derived totals
    """
    sections = {
        section: group_section(lines, section, has_custom_model) for section in Section
    }

    net_result = abs(sections[Section.REVENUE].total) - abs(sections[Section.EXPENSE].total)
    equity_with_result = sections[Section.EQUITY].total + net_result

    return Statement(
        sections=sections,
        net_result=net_result,
        equity_with_result=equity_with_result,
        liabilities_and_equity=sections[Section.LIABILITY].total + equity_with_result,
    )

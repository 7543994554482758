"""
Package-name based application categorization.

Rules are evaluated in order and the first rule with a keyword contained
in the package id wins. Matching is case-sensitive.
"""
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple
from ..models import Category


@dataclass(frozen=True)
class CategoryRule:
    """Assigns ``category`` to package ids containing any of ``keywords``."""
    category: Category
    keywords: Tuple[str, ...]

    def matches(self, package_id: str) -> bool:
        return any(keyword in package_id for keyword in self.keywords)


DEFAULT_RULES: Tuple[CategoryRule, ...] = (
    CategoryRule(Category.SOCIAL, (
        "facebook", "instagram", "twitter", "whatsapp", "snapchat", "telegram",
    )),
    CategoryRule(Category.ENTERTAINMENT, ("youtube", "netflix", "spotify", "tiktok")),
    CategoryRule(Category.PRODUCTIVITY, ("gmail", "office", "docs", "slack")),
    CategoryRule(Category.GAMES, ("game", "play.games")),
    CategoryRule(Category.FINANCE, ("bank", "paypal", "wallet")),
    CategoryRule(Category.HEALTH, ("health", "fitness")),
)


class Categorizer:
    """Maps package ids to categories using an ordered rule table."""

    def __init__(self, rules: Iterable[CategoryRule] = DEFAULT_RULES,
                 default: Category = Category.OTHER) -> None:
        self.rules: Tuple[CategoryRule, ...] = tuple(rules)
        self.default = default

    def categorize(self, package_id: str) -> Category:
        for rule in self.rules:
            if rule.matches(package_id):
                return rule.category
        return self.default


def rules_from_config(raw_rules: List[Dict[str, Any]]) -> Tuple[CategoryRule, ...]:
    """
    Build a rule table from settings-file definitions.

    Each definition is ``{"category": "<label>", "keywords": [...]}`` where
    the label is one of the Category values.

    Raises:
        ValueError: on an unknown label or a malformed definition
    """
    rules: List[CategoryRule] = []
    for raw in raw_rules:
        try:
            category = Category(raw["category"])
            keywords = raw["keywords"]
        except (KeyError, TypeError) as e:
            raise ValueError(f"Malformed category rule {raw!r}") from e
        if not isinstance(keywords, (list, tuple)) or not all(isinstance(k, str) for k in keywords):
            raise ValueError(f"Keywords must be a list of strings in {raw!r}")
        rules.append(CategoryRule(category, tuple(keywords)))
    return tuple(rules)


def load_rules(raw_rules: Optional[List[Dict[str, Any]]]) -> Tuple[CategoryRule, ...]:
    """Return configured rules, or the built-in table if none or invalid."""
    if not raw_rules:
        return DEFAULT_RULES
    try:
        return rules_from_config(raw_rules)
    except ValueError as e:
        print(f"Invalid category_rules in settings, using defaults: {e}")
        return DEFAULT_RULES


_default_categorizer = Categorizer()


def category_for_package(package_id: str) -> Category:
    """Categorize with the built-in rule table."""
    return _default_categorizer.categorize(package_id)

"""Business logic services."""
from .categorizer import Categorizer, CategoryRule, DEFAULT_RULES, category_for_package
from .usage_service import UsageService, descriptor_lookup

__all__ = ['Categorizer', 'CategoryRule', 'DEFAULT_RULES', 'category_for_package',
           'UsageService', 'descriptor_lookup']

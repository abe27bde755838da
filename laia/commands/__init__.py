from laia.commands import enhanced, legacy
from laia.commands.custom import CustomRuleTable


def build_tiers(settings=None):
    """Rule tiers in priority order: enhanced, then custom + legacy."""
    custom = CustomRuleTable(settings) if settings is not None else None
    return [enhanced.build_table(), legacy.build_table(custom)]

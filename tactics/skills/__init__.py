"""
Skill catalog and factories.
"""

from tactics.skills.catalog import (
    TargetingMode,
    SkillDefinition,
    SKILL_CATALOG,
    get_definition,
    get_all_definitions,
    create_skill,
    create_innate_skills,
)

__all__ = [
    "TargetingMode",
    "SkillDefinition",
    "SKILL_CATALOG",
    "get_definition",
    "get_all_definitions",
    "create_skill",
    "create_innate_skills",
]

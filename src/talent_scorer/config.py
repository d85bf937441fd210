"""Centralized configuration management for the talent scorer."""

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field


ISLAND_CODES = ["CC", "EL", "TP", "HL", "SU", "FF", "FE", "PG"]

# Island -> traditional RIASEC interest types
ISLAND_TO_INTERESTS: dict[str, list[str]] = {
    "CC": ["A", "I"],
    "EL": ["E", "S"],
    "TP": ["I", "A"],
    "HL": ["S", "A"],
    "SU": ["R", "I", "C"],
    "FF": ["I", "E", "C"],
    "FE": ["A", "I"],
    "PG": ["S", "E", "C"],
}

# Island -> meta-intelligences
ISLAND_TO_META: dict[str, list[str]] = {
    "CC": ["CQ", "XQ", "DQ"],
    "EL": ["CQ", "FQ", "DQ"],
    "TP": ["AQ", "SEQ", "XQ"],
    "HL": ["AQ", "SEQ", "DQ"],
    "SU": ["SEQ", "DQ", "FQ"],
    "FF": ["FQ", "DQ", "SEQ"],
    "FE": ["CQ", "DQ", "XQ", "AQ"],
    "PG": ["SEQ", "DQ", "CQ", "AQ"],
}


class FusionConfig(BaseModel):
    """Weights and mappings for blending the two tiers into island scores.

    Each pair of weights should sum to 1.0.
    """
    interest_weight: float = Field(
        0.6,
        description="Share of the traditional interest signal in the traditional core"
    )
    intelligence_weight: float = Field(
        0.4,
        description="Share of the overall intelligence average in the traditional core"
    )
    island_weight: float = Field(
        0.7,
        description="Share of the raw island score in the future core"
    )
    meta_weight: float = Field(
        0.3,
        description="Share of the mapped meta-intelligence average in the future core"
    )
    traditional_weight: float = Field(
        0.6,
        description="Share of the traditional core in the fused score"
    )
    future_weight: float = Field(
        0.4,
        description="Share of the future core in the fused score"
    )
    island_codes: list[str] = Field(
        default_factory=lambda: list(ISLAND_CODES),
        description="Island codes, in declaration order (used to break ties)"
    )
    island_to_interests: dict[str, list[str]] = Field(
        default_factory=lambda: {k: list(v) for k, v in ISLAND_TO_INTERESTS.items()},
        description="Traditional interest types feeding each island"
    )
    island_to_meta: dict[str, list[str]] = Field(
        default_factory=lambda: {k: list(v) for k, v in ISLAND_TO_META.items()},
        description="Meta-intelligences feeding each island"
    )


class RankingConfig(BaseModel):
    """Parameters of the career recommendation ranking."""
    top_islands: int = Field(3, description="Number of top islands whose careers are considered")
    max_recommendations: int = Field(6, description="Maximum number of recommendations returned")
    affinity_weight: float = Field(0.7, description="Share of the island score in the match score")
    trend_weight: float = Field(0.3, description="Share of the trend score in the match score")
    default_trend_score: float = Field(
        75.0,
        description="Trend score used when a career record has none"
    )


class ModuleKeysConfig(BaseModel):
    """Module keys of the pro question bank, by role.

    The legacy pro layout is always converted with the fixed keys of
    ``question_bank.loader.PRO_MODULE_ORDER`` and ``PRO_PERSONALITY_ORDER``,
    which these defaults match. Other keys only take effect for banks in
    the canonical layout, where modules carry their own keys.
    """
    meta: str = Field("metaIntelligence", description="Meta-intelligence module")
    islands: str = Field("interests8", description="Eight-island interest module")
    big5: str = Field("big5", description="Big Five module")
    enneagram: str = Field("enneagram", description="Enneagram module")
    mbti: str = Field("mbti", description="MBTI forced-choice module")
    composite: str = Field("composite", description="Composite personality module")


class TraditionalConfig(BaseModel):
    """Free-tier scoring settings."""
    interest_dimensions: list[str] = Field(
        default_factory=lambda: ["R", "I", "A", "S", "E", "C"],
        description="Interest types always present in the interest score map"
    )
    top_interests: int = Field(3, description="Number of top interest types reported")


class ScorerConfig(BaseModel):
    """Complete configuration for the talent scorer."""
    fusion: FusionConfig = Field(default_factory=FusionConfig)
    ranking: RankingConfig = Field(default_factory=RankingConfig)
    modules: ModuleKeysConfig = Field(default_factory=ModuleKeysConfig)
    traditional: TraditionalConfig = Field(default_factory=TraditionalConfig)


# Global config instance
_config: Optional[ScorerConfig] = None


def get_config() -> ScorerConfig:
    """Get the current configuration.

    Returns the global config, initializing with defaults if not yet loaded.
    """
    global _config
    if _config is None:
        _config = ScorerConfig()
    return _config


def load_config(path: Path) -> ScorerConfig:
    """Load configuration from a YAML file.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        The loaded ScorerConfig.
    """
    global _config

    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)

    _config = ScorerConfig.model_validate(data or {})
    return _config


def reset_config() -> None:
    """Reset configuration to defaults."""
    global _config
    _config = ScorerConfig()


def find_config_file() -> Optional[Path]:
    """Find a scorer configuration file.

    Looks in (order of priority):
    1. TALENT_SCORER_CONFIG environment variable
    2. ./scorer-config.yaml
    3. ./scorer-config.yml
    4. ~/.config/talent-scorer/config.yaml
    """
    env_path = os.environ.get("TALENT_SCORER_CONFIG")
    if env_path:
        path = Path(env_path)
        if path.exists():
            return path

    for name in ["scorer-config.yaml", "scorer-config.yml"]:
        path = Path(name)
        if path.exists():
            return path

    user_config = Path.home() / ".config" / "talent-scorer" / "config.yaml"
    if user_config.exists():
        return user_config

    return None


def save_default_config(path: Path) -> None:
    """Save the default configuration to a YAML file.

    Args:
        path: Path where to save the configuration.
    """
    data = ScorerConfig().model_dump()

    yaml_content = """# Talent Scorer Configuration
# ===========================
#
# This file configures island fusion weights and mappings, career ranking
# and the module keys of the pro question bank.
#
# Copy this file to one of these locations:
#   - ./scorer-config.yaml (current directory)
#   - ~/.config/talent-scorer/config.yaml (user config)
#
# Or set the TALENT_SCORER_CONFIG environment variable.

"""
    yaml_content += yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        f.write(yaml_content)

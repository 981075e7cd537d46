"""Configuration management for Idea Terminal."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


@dataclass
class CollectionConfig:
    """Time windows and sampling for a daily collection."""
    lookback_days: int = 365  # Ideas older than this are ignored for clusters
    daily_log_days: int = 30  # Daily log files read per run
    current_window_days: int = 7  # Week-over-week window length
    idea_sample_size: int = 100  # Ideas embedded in the report
    advice_days: int = 7  # Advice logs read per run
    base44_days: int = 7  # Base44 click logs read per run


@dataclass
class ClusteringConfig:
    """Cluster thresholds and fallback rules."""
    cluster_threshold: int = 5  # Minimum ideas sharing a keyword
    min_keyword_length: int = 3
    min_clusters_before_fallback: int = 3
    category_min_count: int = 10
    category_min_delta: float = 0.1
    category_limit: int = 5
    problem_min_count: int = 20
    problem_limit: int = 3
    problem_name_length: int = 60
    max_clusters: int = 20


@dataclass
class HeatmapConfig:
    """Problem heatmap settings."""
    min_problem_length: int = 10  # Problems must be longer than this
    name_length: int = 150
    max_entries: int = 10
    max_examples: int = 3
    min_common_keywords: int = 2
    min_jaccard: float = 0.5
    low_score_threshold: int = 60  # Chart fallback: scores below are friction
    min_chart_proxies: int = 5
    backfill_min_count: int = 3


@dataclass
class SourcesConfig:
    """Flat log files the collectors drop on disk."""
    directory: str = "./logs"
    overall_log: str = "free_tool_log.txt"
    daily_log_prefix: str = "free_tool_log"  # + YYMMDD + .txt
    chart_log: str = "tool_chart.txt"
    idea_generator_log: str = "gen-idea-log.txt"
    advice_log_prefix: str = "tool_advise_"  # + YYMMDD + .txt
    base44_log_suffix: str = "-base44.txt"  # YYYY-MM-DD + suffix


@dataclass
class OutputConfig:
    """Report output configuration."""
    directory: str = "./data/internal"


@dataclass
class Config:
    """Main configuration container."""
    collection: CollectionConfig = field(default_factory=CollectionConfig)
    clustering: ClusteringConfig = field(default_factory=ClusteringConfig)
    heatmap: HeatmapConfig = field(default_factory=HeatmapConfig)
    sources: SourcesConfig = field(default_factory=SourcesConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


def _dict_to_dataclass(data: dict[str, Any], cls: type) -> Any:
    """Convert a dictionary to a dataclass instance, ignoring unknown keys."""
    if not data:
        return cls()

    field_names = set(cls.__dataclass_fields__)
    kwargs = {key: value for key, value in data.items() if key in field_names}
    return cls(**kwargs)


def _apply_env_overrides(config: Config) -> Config:
    """Let the environment point the CLI at other directories."""
    sources_dir = os.getenv("IDEA_TERMINAL_SOURCES_DIR")
    if sources_dir:
        config.sources.directory = sources_dir

    output_dir = os.getenv("IDEA_TERMINAL_OUTPUT_DIR")
    if output_dir:
        config.output.directory = output_dir

    return config


def load_config(config_path: str | Path | None = None) -> Config:
    """Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, looks for
            config/local.yaml then config/default.yaml.

    Returns:
        Config object with all settings.
    """
    if config_path is None:
        local_config = Path("config/local.yaml")
        default_config = Path("config/default.yaml")

        if local_config.exists():
            config_path = local_config
        elif default_config.exists():
            config_path = default_config
        else:
            return _apply_env_overrides(Config())

    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    config = Config(
        collection=_dict_to_dataclass(data.get("collection", {}), CollectionConfig),
        clustering=_dict_to_dataclass(data.get("clustering", {}), ClusteringConfig),
        heatmap=_dict_to_dataclass(data.get("heatmap", {}), HeatmapConfig),
        sources=_dict_to_dataclass(data.get("sources", {}), SourcesConfig),
        output=_dict_to_dataclass(data.get("output", {}), OutputConfig),
    )

    return _apply_env_overrides(config)


def ensure_directories(config: Config) -> None:
    """Ensure required directories exist."""
    Path(config.sources.directory).mkdir(parents=True, exist_ok=True)
    Path(config.output.directory).mkdir(parents=True, exist_ok=True)


# Global config instance (lazy loaded, CLI only)
_config: Config | None = None


def get_config() -> Config:
    """Get the global config instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config(config_path: str | Path | None = None) -> Config:
    """Reload configuration from file."""
    global _config
    _config = load_config(config_path)
    return _config

"""YAML config loader."""

from dataclasses import dataclass, field
from typing import Optional

import yaml


@dataclass
class DownloadConfig:
    timeout: int = 30
    connect_timeout: int = 10
    max_file_size: int = 5 * 1024 * 1024
    user_agent: str = "DocsMirror/1.0"
    fail_on_any_error: bool = False


@dataclass
class SiteConfig:
    base_url: str = "https://docs.anthropic.com"
    overview_path: str = "/en/docs/claude-code/overview"
    docs_prefix: str = "/en/docs/claude-code/"
    doc_suffix: str = ".md"

    @property
    def overview_url(self) -> str:
        return f"{self.base_url}{self.overview_path}"

    def document_url(self, path: str) -> str:
        return f"{self.base_url}{path}{self.doc_suffix}"


@dataclass
class AppConfig:
    target_dir: str = "claude-code-docs"
    reports_dir: str = "reports"
    log_dir: str = ""
    site: SiteConfig = field(default_factory=SiteConfig)
    download: DownloadConfig = field(default_factory=DownloadConfig)


def load_config(config_path: Optional[str] = None) -> AppConfig:
    if config_path is None:
        return AppConfig()

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise TypeError(f"{config_path}: top level must be a mapping, got {type(raw).__name__}")

    site_raw = raw.get("site", {}) or {}
    site = SiteConfig(**{k: v for k, v in site_raw.items() if k in SiteConfig.__dataclass_fields__})

    dl_raw = raw.get("download", {}) or {}
    download = DownloadConfig(**{k: v for k, v in dl_raw.items() if k in DownloadConfig.__dataclass_fields__})

    return AppConfig(
        target_dir=raw.get("target_dir", "claude-code-docs"),
        reports_dir=raw.get("reports_dir", "reports"),
        log_dir=raw.get("log_dir", "") or "",
        site=site,
        download=download,
    )

"""
Canonical provider metadata (display names and logos).

- Key: normalized provider identifier (lowercase, trimmed)
- Value: the exact display string / logo file shown across the site

When a provider is not mapped, the display name falls back to the raw
input string and the logo falls back to a generic placeholder asset.
"""

from __future__ import annotations

from ._data import PROVIDER_LOGO_MAP, PROVIDER_NAME_MAP
from .config import ProvidersConfig
from .core.types import normalize_provider


class ProviderMetadata:
    """Lookup of presentation data for provider identifiers."""

    def __init__(
        self,
        names: dict[str, str] | None = None,
        logos: dict[str, str] | None = None,
        fallback_logo: str = "/file.svg",
    ):
        self._names = dict(PROVIDER_NAME_MAP if names is None else names)
        self._logos = dict(PROVIDER_LOGO_MAP if logos is None else logos)
        self.fallback_logo = fallback_logo

    @classmethod
    def from_config(cls, cfg: ProvidersConfig) -> "ProviderMetadata":
        names = dict(PROVIDER_NAME_MAP)
        names.update({normalize_provider(k): v for k, v in cfg.display_names.items()})
        logos = dict(PROVIDER_LOGO_MAP)
        logos.update({normalize_provider(k): v for k, v in cfg.logos.items()})
        return cls(names=names, logos=logos, fallback_logo=cfg.fallback_logo)

    def display_name(self, provider: str | None) -> str:
        if not provider:
            return ""
        return self._names.get(normalize_provider(provider), provider)

    def has_logo(self, provider: str | None) -> bool:
        return normalize_provider(provider) in self._logos

    def logo_path(self, provider: str | None) -> str:
        logo_file = self._logos.get(normalize_provider(provider))
        return f"/logos/{logo_file}.svg" if logo_file else self.fallback_logo

"""Unit tests for theme loading, validation, and Rich theme generation."""

from pathlib import Path

import pytest
from diskcare.core.theme import (
    STYLE_SOURCES,
    ThemeColors,
    build_rich_theme,
    load_theme_colors,
)
from rich.theme import Theme


class TestThemeColors:
    """Tests for the ThemeColors model."""

    def test_default_values(self) -> None:
        """ThemeColors has a default for every palette key."""
        colors = ThemeColors()

        assert colors.header == "#69B9A1"
        assert colors.eligible == "#c1ff62"
        assert colors.risk_do_not_touch == "#d44ebc"

    def test_short_hex_accepted_and_stripped(self) -> None:
        """Three-digit hex codes are valid and whitespace is trimmed."""
        assert ThemeColors(muted=" #abc ").muted == "#abc"

    @pytest.mark.parametrize("value", ["ffffff", "#ff", "#gggggg", "#1234"])
    def test_invalid_colors(self, value: str) -> None:
        """Malformed colors are rejected."""
        with pytest.raises(ValueError, match="expected #RGB or #RRGGBB"):
            ThemeColors(muted=value)

    def test_extra_fields_forbidden(self) -> None:
        """Unknown keys are rejected."""
        with pytest.raises(ValueError):
            ThemeColors(package_manual="#ffffff")  # type: ignore[call-arg]


class TestLoadThemeColors:
    """Tests for merging the bundled and user palettes."""

    def test_bundled_theme(self, tmp_path: Path) -> None:
        """Without a user file the bundled palette is used."""
        colors = load_theme_colors(tmp_path / "missing.toml")

        assert colors == ThemeColors()

    def test_default_user_path(self, isolated_xdg: Path) -> None:
        """Overrides are read from the config directory by default."""
        user_dir = isolated_xdg / "config" / "diskcare"
        user_dir.mkdir(parents=True, exist_ok=True)
        (user_dir / "theme.toml").write_text('[colors]\nblocked = "#123456"\n')

        assert load_theme_colors().blocked == "#123456"

    def test_user_override(self, tmp_path: Path) -> None:
        """User keys override bundled ones; the rest stay bundled."""
        user_theme = tmp_path / "theme.toml"
        user_theme.write_text('[colors]\neligible = "#000000"\n')

        colors = load_theme_colors(user_theme)

        assert colors.eligible == "#000000"
        assert colors.header == "#69B9A1"

    def test_invalid_user_color_falls_back(self, tmp_path: Path) -> None:
        """An invalid color in the user theme yields the defaults."""
        user_theme = tmp_path / "theme.toml"
        user_theme.write_text('[colors]\neligible = "green"\n')

        assert load_theme_colors(user_theme) == ThemeColors()

    def test_broken_toml_is_ignored(self, tmp_path: Path) -> None:
        """Malformed TOML is treated as absent."""
        user_theme = tmp_path / "theme.toml"
        user_theme.write_text("not valid [ toml")

        assert load_theme_colors(user_theme) == ThemeColors()

    def test_colors_not_a_table(self, tmp_path: Path) -> None:
        """A scalar colors entry is ignored."""
        user_theme = tmp_path / "theme.toml"
        user_theme.write_text('colors = "red"\n')

        assert load_theme_colors(user_theme) == ThemeColors()


class TestBuildRichTheme:
    """Tests for build_rich_theme."""

    def test_every_style_is_defined(self) -> None:
        """Each mapped style name exists in the Rich theme."""
        theme = build_rich_theme(ThemeColors())

        assert isinstance(theme, Theme)
        for name in STYLE_SOURCES:
            assert name in theme.styles

    def test_bold_attributes_applied(self) -> None:
        """Styles with attributes combine them with the palette color."""
        theme = build_rich_theme(ThemeColors(error="#ff0000"))

        assert theme.styles["error"].bold is True
        assert theme.styles["muted"].bold is not True

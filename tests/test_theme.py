import pytest

from time_tracking_calendar.theme import (
    DARK_SELECTOR,
    HSL,
    ROLE_NAMES,
    ColorError,
    derive_theme,
    hex_to_hsl,
    hsl_css,
    normalize_source_color,
    theme_stylesheet,
)


# =============================================================================
# hex_to_hsl
# =============================================================================

@pytest.mark.parametrize(
    "hex_color,expected",
    [
        ("#ffffff", (0, 0, 100)),
        ("#000000", (0, 0, 0)),
        ("#ff0000", (0, 100, 50)),
        ("#00ff00", (120, 100, 50)),
        ("#0000ff", (240, 100, 50)),
        ("#ff00ff", (300, 100, 50)),
        ("#808080", (0, 0, 50.2)),
        ("#2c83bd", (204, 62.2, 45.7)),
    ],
)
def test_hex_to_hsl_known_values(hex_color, expected):
    assert tuple(hex_to_hsl(hex_color)) == expected


def test_three_digit_form_expands():
    assert hex_to_hsl("#f00") == hex_to_hsl("#ff0000")
    assert hex_to_hsl("#FFF") == HSL(0, 0, 100)


def test_alpha_is_discarded():
    assert hex_to_hsl("#2c83bdff") == hex_to_hsl("#2c83bd")
    assert hex_to_hsl("#ff000000") == HSL(0, 100, 50)


def test_negative_hue_wraps_into_range():
    assert hex_to_hsl("#ff0001").hue == 0
    assert hex_to_hsl("#ff0004").hue == 359


@pytest.mark.parametrize("bad", ["#12345", "#ff00", "123456", "#gggggg", "", "#"])
def test_malformed_hex_falls_back_to_black(bad):
    assert hex_to_hsl(bad) == HSL(0, 0, 0)


def test_malformed_hex_strict_raises():
    with pytest.raises(ColorError):
        hex_to_hsl("#12345", strict=True)


def test_hsl_css_formatting():
    assert hsl_css(0, 100, 40) == "hsl(0, 100%, 40%)"
    assert hsl_css(204, 52.2, 90) == "hsl(204, 52.2%, 90%)"
    assert hsl_css(204, 62.2 - 15, 95) == "hsl(204, 47.2%, 95%)"


# =============================================================================
# derive_theme
# =============================================================================

def test_normalize_source_color_strips_alpha():
    assert normalize_source_color("#2c83bdff") == "#2c83bd"
    assert normalize_source_color("#2c83bd") == "#2c83bd"


def test_derive_theme_role_names_match_in_both_modes():
    theme = derive_theme("#2c83bd")
    expected = [f"--md-sys-color-{role}" for role in ROLE_NAMES]
    assert list(theme.light) == expected
    assert list(theme.dark) == expected
    assert len(expected) == 17


def test_derive_theme_light_values_for_red():
    light = derive_theme("#ff0000").light
    assert light["--md-sys-color-primary"] == "hsl(0, 100%, 40%)"
    assert light["--md-sys-color-on-primary"] == "hsl(0, 100%, 100%)"
    assert light["--md-sys-color-secondary"] == "hsl(0, 90%, 40%)"
    assert light["--md-sys-color-on-secondary"] == "hsl(0, 100%, 100%)"
    assert light["--md-sys-color-surface"] == "hsl(0, 100%, 99%)"
    assert light["--md-sys-color-surface-variant"] == "hsl(0, 95%, 90%)"
    assert light["--md-sys-color-surface-container-high"] == "hsl(0, 85%, 92%)"
    assert light["--md-sys-color-outline-variant"] == "hsl(0, 90%, 80%)"


def test_derive_theme_dark_values_for_red():
    dark = derive_theme("#ff0000").dark
    assert dark["--md-sys-color-primary"] == "hsl(0, 100%, 80%)"
    assert dark["--md-sys-color-on-secondary"] == "hsl(0, 90%, 20%)"
    assert dark["--md-sys-color-surface"] == "hsl(0, 100%, 6%)"
    assert dark["--md-sys-color-surface-container-highest"] == "hsl(0, 85%, 22%)"
    assert dark["--md-sys-color-outline"] == "hsl(0, 90%, 60%)"


def test_derive_theme_default_source_color():
    theme = derive_theme("#2c83bdff")
    assert theme.source_color == "#2c83bd"
    assert theme.base == HSL(204, 62.2, 45.7)
    assert theme.light["--md-sys-color-secondary-container"] == "hsl(204, 52.2%, 90%)"
    assert theme.dark["--md-sys-color-surface-container"] == "hsl(204, 47.2%, 12%)"


def test_derive_theme_is_idempotent():
    first = derive_theme("#b3261e")
    second = derive_theme("#b3261e")
    assert dict(first.light) == dict(second.light)
    assert dict(first.dark) == dict(second.dark)
    assert first.to_api_dict() == second.to_api_dict()


def test_role_tables_are_read_only():
    theme = derive_theme("#006d3d")
    with pytest.raises(TypeError):
        theme.light["--md-sys-color-primary"] = "red"


def test_theme_roles_selects_mode():
    theme = derive_theme("#3b5998")
    assert theme.roles(False) is theme.light
    assert theme.roles(True) is theme.dark


def test_stylesheet_scopes_light_to_root_and_dark_to_flag():
    theme = derive_theme("#ff0000")
    css = theme_stylesheet(theme)
    root_block, dark_block = css.split(DARK_SELECTOR)
    assert root_block.startswith(":root {")
    assert "--md-sys-color-primary: hsl(0, 100%, 40%);" in root_block
    assert "--md-sys-color-primary: hsl(0, 100%, 80%);" in dark_block
    assert css.count("--md-sys-color-primary:") == 2


def test_api_dict_shape():
    body = derive_theme("#ff0000").to_api_dict()
    assert body["sourceColor"] == "#ff0000"
    assert body["base"] == {"hue": 0, "saturation": 100.0, "lightness": 50.0}
    assert body["light"]["--md-sys-color-primary"] == "hsl(0, 100%, 40%)"

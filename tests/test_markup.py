from datetime import date

from time_tracking_calendar.api.auth import UserProfile
from time_tracking_calendar.theme import STYLE_ELEMENT_ID, derive_theme
from time_tracking_calendar.view import (
    ViewState,
    auth_markup,
    grid_markup,
    page_markup,
    render,
    render_state,
    theme_toggle_markup,
)

REF = date(2025, 7, 23)


def test_grid_markup_has_one_element_per_cell():
    layout = render(REF, 3, today=REF)
    html = grid_markup(layout)
    assert html.startswith('<div class="calendar-grid populated" style="grid-template-columns: 55px repeat(3, 1fr)">')
    assert html.count('class="grid-cell') == len(layout.cells)
    assert html.count("corner-cell") == 1
    assert html.count("time-label") == 24
    assert html.count("time-slot") == 72


def test_grid_markup_marks_today_header():
    html = grid_markup(render(REF, 7, today=REF))
    assert html.count("day-header today") == 1
    assert '<div class="grid-cell day-header today" data-date="2025-07-23">' in html
    assert '<span class="day-name">Wed</span><span class="day-number">23</span>' in html


def test_grid_markup_time_slots_carry_hour_and_date():
    html = grid_markup(render(REF, 1, today=REF))
    assert '<div class="grid-cell time-slot" data-hour="0" data-date="2025-07-23"></div>' in html
    assert '<div class="grid-cell time-slot" data-hour="23" data-date="2025-07-23"></div>' in html
    assert '<div class="grid-cell time-label">12 PM</div>' in html


def test_theme_toggle_icon_follows_mode():
    assert "light_mode" in theme_toggle_markup(True)
    assert "dark_mode" in theme_toggle_markup(False)


def test_auth_markup_signed_out():
    html = auth_markup(None)
    assert "account_circle" in html
    assert "Log in with Google" in html
    assert "auth-popup" not in html
    assert 'data-auth-action="sign-in"' in html


def test_auth_markup_signed_in_with_photo():
    user = UserProfile(email="ada@example.com", display_name="Ada <L>", photo_url="https://img/a.png")
    html = auth_markup(user)
    assert '<img src="https://img/a.png"' in html
    assert "View profile for Ada &lt;L&gt;" in html
    assert "ada@example.com" in html


def test_auth_markup_signed_in_without_photo_falls_back_to_icon():
    html = auth_markup(UserProfile(email="ada@example.com"))
    assert "account_circle" in html
    assert "auth-popup-email" in html


def test_page_markup_light():
    state = ViewState(REF, 3)
    html = page_markup(state, render_state(state, today=REF), derive_theme("#ff0000"))
    assert "<body>" in html
    assert f'<style id="{STYLE_ELEMENT_ID}">' in html
    assert "<h2>3-Day View</h2>" in html
    assert 'id="three-day-view" class="pill-button active"' in html
    assert 'id="week-view" class="pill-button"' in html
    assert "/view/page?date=2025-07-26&amp;days=3" in html
    assert "/view/page?date=2025-07-20&amp;days=3" in html
    assert "__GRID_MARKUP__" not in html


def test_page_markup_dark_sets_body_attribute():
    state = ViewState(REF, 1)
    html = page_markup(
        state,
        render_state(state, today=REF),
        derive_theme("#2c83bd"),
        is_dark=True,
        user=UserProfile(email="ada@example.com"),
        base_path="/calendar-page",
    )
    assert '<body data-theme="dark">' in html
    assert "light_mode" in html
    assert 'href="/calendar-page?days=1"' in html


def test_page_markup_disables_links_past_calendar_limits():
    last = ViewState(date(9999, 12, 30), 1)
    html = page_markup(last, render_state(last, today=REF), derive_theme("#ff0000"))
    assert '<span id="next-period-btn" class="icon-button disabled" aria-disabled="true">' in html
    assert '<a id="prev-period-btn" class="icon-button" href="/view/page?date=9999-12-29&amp;days=1">' in html

    first = ViewState(date.min, 1)
    html = page_markup(first, render_state(first, today=REF), derive_theme("#ff0000"))
    assert '<span id="prev-period-btn" class="icon-button disabled"' in html
    assert '<a id="next-period-btn" class="icon-button"' in html


def test_page_theme_toggle_posts_to_page_route():
    state = ViewState(REF, 3)
    html = page_markup(state, render_state(state, today=REF), derive_theme("#ff0000"))
    assert (
        '<form class="theme-toggle-form" method="post" '
        'action="/view/page/theme-toggle?date=2025-07-23&amp;days=3">'
    ) in html
    assert '<button class="theme-toggle" type="submit" aria-label="Switch to dark mode">' in html


def test_auth_popup_has_avatar_and_sign_out():
    user = UserProfile(email="ada@example.com", display_name="Ada", photo_url="https://img/a.png")
    html = auth_markup(user)
    assert '<img src="https://img/a.png" alt="Ada" class="auth-popup-avatar">' in html
    assert 'data-auth-action="sign-out">Sign Out</button>' in html
    assert html.startswith('<details class="auth-container"><summary class="auth-button"')
    assert "Sign Out" not in auth_markup(None)

"""
Theme management for UI.
Light (beige) and dark themes plus the phrase font size.
"""

from PySide6.QtGui import QPalette, QColor, QFont

from config import (BG_BEIGE, MUTED_GREEN, MUTED_BLUE, DARK_BLUE, SOFT_RED, LIGHT_RED,
                    BG_DARK, SURFACE_DARK, ON_SURFACE_DARK, FONT_SIZES)


class Theme:
    """Represents a UI theme."""

    def __init__(self, name, colors):
        self.name = name
        self.colors = colors


class ThemeManager:
    """Builds palettes and widget styles for the current settings."""

    THEMES = {
        'light': Theme('Light', {
            'background': BG_BEIGE,
            'surface': '#FFFFFF',
            'surface_variant': MUTED_BLUE,
            'on_background': DARK_BLUE,
            'primary': DARK_BLUE,
            'accent': MUTED_GREEN,
            'danger': SOFT_RED,
            'danger_light': LIGHT_RED,
        }),
        'dark': Theme('Dark', {
            'background': BG_DARK,
            'surface': SURFACE_DARK,
            'surface_variant': SURFACE_DARK,
            'on_background': ON_SURFACE_DARK,
            'primary': MUTED_GREEN,
            'accent': MUTED_GREEN,
            'danger': SOFT_RED,
            'danger_light': LIGHT_RED,
        }),
    }

    def __init__(self):
        self.current_theme = 'light'
        self.font_size = 'Large'
        self.applied = False

    @staticmethod
    def theme_name(dark_theme):
        return 'dark' if dark_theme else 'light'

    def get_color(self, color_name):
        """Get a specific color from current theme."""
        theme = self.THEMES[self.current_theme]
        return theme.colors.get(color_name, '#000000')

    def build_palette(self, theme_name):
        colors = self.THEMES[theme_name].colors
        palette = QPalette()
        palette.setColor(QPalette.ColorRole.Window, QColor(colors['background']))
        palette.setColor(QPalette.ColorRole.WindowText, QColor(colors['on_background']))
        palette.setColor(QPalette.ColorRole.Base, QColor(colors['surface']))
        palette.setColor(QPalette.ColorRole.AlternateBase, QColor(colors['surface_variant']))
        palette.setColor(QPalette.ColorRole.Text, QColor(colors['on_background']))
        palette.setColor(QPalette.ColorRole.Button, QColor(colors['surface']))
        palette.setColor(QPalette.ColorRole.ButtonText, QColor(colors['on_background']))
        palette.setColor(QPalette.ColorRole.Highlight, QColor(colors['accent']))
        palette.setColor(QPalette.ColorRole.HighlightedText, QColor(DARK_BLUE))
        return palette

    def setup(self, app):
        """Select the widget style once at startup."""
        app.setStyle("Fusion")

    def apply(self, app, settings):
        """
        Apply theme and font size from a Settings snapshot.

        Args:
            app: QApplication instance
            settings: Settings

        Returns:
            True if the theme or font size changed
        """
        theme_name = self.theme_name(settings.dark_theme)
        if self.applied and (theme_name, settings.font_size) == (self.current_theme, self.font_size):
            return False

        self.current_theme = theme_name
        self.font_size = settings.font_size
        app.setPalette(self.build_palette(self.current_theme))
        self.applied = True
        return True

    def phrase_font(self):
        """Serif font for the recognized phrase, sized by the font setting."""
        font = QFont("Serif")
        font.setPointSize(FONT_SIZES.get(self.font_size, FONT_SIZES['Large']))
        return font

    def title_font(self):
        font = QFont("Serif")
        font.setPointSize(26)
        font.setBold(True)
        return font

    def card_style(self):
        return (f"background-color: {self.get_color('surface_variant')};"
                f"color: {self.get_color('on_background')};"
                "border-radius: 24px; padding: 24px;")

    def pill_button_style(self, color_name):
        return (f"background-color: {self.get_color(color_name)}; color: black;"
                "border-radius: 18px; padding: 8px 24px;")

    def circle_button_style(self, color_name, diameter):
        return (f"background-color: {self.get_color(color_name)};"
                f"color: {self.get_color('on_background')};"
                f"border-radius: {diameter // 2}px; font-size: {diameter // 3}px;")

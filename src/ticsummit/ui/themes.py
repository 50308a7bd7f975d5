from textual.theme import Theme

tic_dark_theme = Theme(
    name="TIC Dark",
    primary="#3B82F6",
    secondary="#8B5CF6",
    accent="#F59E0B",
    foreground="#E5E7EB",
    background="#0B1220",
    surface="#111827",
    panel="#1F2937",
    success="#22C55E",
    warning="#F59E0B",
    error="#EF4444",
    dark=True,
)

tic_light_theme = Theme(
    name="TIC Light",
    primary="#2563EB",
    secondary="#7C3AED",
    accent="#D97706",
    foreground="#111827",
    background="#F9FAFB",
    surface="#FFFFFF",
    panel="#E5E7EB",
    success="#16A34A",
    warning="#D97706",
    error="#DC2626",
    dark=False,
)

THEMES = [tic_dark_theme, tic_light_theme]

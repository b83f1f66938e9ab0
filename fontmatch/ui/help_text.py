# fontmatch/ui/help_text.py
"""
Reusable help strings for UI tooltips and glossary.
"""

# Short one-liners for widget help=
TOOLTIP_WEBFONT = "Family name of the custom font you want to imitate. Upload its file if it is not installed."
TOOLTIP_FALLBACK = "Installed font that is shown while the webfont loads (or if it fails)."
TOOLTIP_FONT_UPLOAD = "TTF, OTF or WOFF. Registered under the file name before the first dot, e.g. 'Brand.woff' -> 'Brand'."
TOOLTIP_FONT_SIZE = "Font size in px. The search range is ±20% of this value on both axes."
TOOLTIP_LINE_HEIGHT = "Unitless multiplier of the font size, as in CSS line-height: 1.1."
TOOLTIP_SPACING = "Spacing applied to the webfont reference. The fallback spacing is what gets searched."
TOOLTIP_ANIMATE = "Pause briefly after each improvement so the diff can be watched. Slower."
TOOLTIP_WORKERS = "Render the five candidates of a round in parallel threads."

MATCH_SHORT = (
    "Renders the text in both fonts, then searches the fallback's letter-spacing and word-spacing "
    "that minimise the number of differing pixels."
)

# Full glossary for Help & glossary expander
GLOSSARY_MD = """
### Webfont
The custom typeface being matched against.

### Fallback font
A system font whose spacing is tuned to look like the webfont, to reduce layout shift while the webfont loads.

### Mismatch score
Number of pixels that differ beyond a perceptual threshold (0.2) between the webfont and fallback renderings.
Lower is better; anti-aliased edge pixels count.

### Search
Coordinate descent: each round tries the current spacing and one step north, west, east and south,
moves to the best of the five and shrinks the steps. It stops when a step gets below 0.01 px.

### Diff image
Red pixels differ; grey pixels match. Background colours of the two renderings are ignored by the threshold.

### Result
Copy the `letterSpacing` / `wordSpacing` values into the fallback's `@font-face` or CSS rule.
The comparison image overlays the webfont (black) and the tuned fallback (red).
"""

QUICK_TROUBLESHOOT_MD = """
- **Font not found:** an unknown family silently renders in DejaVu Sans. Upload the font file instead.
- **Slow run:** large font sizes and long texts take longer; try a shorter sample or more workers.
- **Weight ignored:** only installed or uploaded files of that weight are used; weights are not synthesized.
"""

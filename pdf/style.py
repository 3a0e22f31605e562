"""
pdf/style.py — stałe wyglądu: kolory, rozmiary fontu, geometria.

Współrzędne w układzie PyMuPDF (punkt 0,0 w lewym górnym rogu, y rośnie
w dół). Wartości y oznaczają linię bazową tekstu mierzoną od górnej krawędzi.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Kolory (RGB 0..1)
# ---------------------------------------------------------------------------

GREEN      = (0.04, 0.60, 0.47)
GREY       = (0.29, 0.29, 0.29)
LIGHT_GREY = (0.85, 0.85, 0.85)
WHITE      = (1.0, 1.0, 1.0)

# ---------------------------------------------------------------------------
# Spis treści
# ---------------------------------------------------------------------------

SUMMARY_MARGIN       = 50.0    # lewy i prawy margines
SUMMARY_TITLE_SIZE   = 24.0
SUMMARY_TITLE_Y      = 80.0
SUMMARY_RULE_Y       = 100.0   # linia pod tytułem spisu
SUMMARY_FIRST_TOP    = 130.0   # pierwsza pozycja na pierwszej stronie spisu
SUMMARY_CONTINUED_TOP = 70.0   # pierwsza pozycja na kolejnych stronach spisu

THEME_SIZE       = 11.0
THEME_HEIGHT     = 30.0
THEME_RULE_DY    = 6.0     # linia pod etykietą tematu (od linii bazowej)
THEME_MIN_SPACE  = 100.0   # min. miejsce do dołu strony przed nagłówkiem tematu

ENTRY_SIZE       = 9.5
ENTRY_INDENT     = 12.0
LINE_HEIGHT      = 22.0
ROW_MIN_SPACE    = 60.0    # min. miejsce do dołu strony przed linią fiszki

DOT_UNIT         = " . "
LEADER_GAP       = 10.0    # łączny odstęp tytuł → kropki → numer
LEADER_OFFSET    = 4.0     # odstęp między końcem tytułu a kropkami

ELLIPSIS         = "…"

# ---------------------------------------------------------------------------
# Nagłówek / stopka stron fiszek
# ---------------------------------------------------------------------------

HEADER_HEIGHT    = 36.0
HEADER_TEXT_X    = 20.0
HEADER_TEXT_Y    = 24.0
HEADER_SIZE      = 9.0
HEADER_TITLE_GAP = 12.0    # odstęp tytułu fiszki od tekstu po lewej

FOOTER_MARGIN    = 20.0
FOOTER_RULE_DY   = 20.0    # linia stopki: page_height - FOOTER_RULE_DY
FOOTER_TEXT_DY   = 7.0     # linia bazowa numeru: page_height - FOOTER_TEXT_DY
FOOTER_SIZE      = 8.0
FOOTER_RULE_WIDTH = 0.5

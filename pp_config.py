# pp_config.py
# Brisnet PP Parser - Vocabularies & Tunables
# This module contains ONLY pure data: no function definitions, no external imports.

# ===================== Record Anchors =====================
POST_MIN = 1
POST_MAX = 20

# ===================== Header Zone =====================
HEADER_LINES = 3  # Lines joined when recovering post/name/tag from a span
ODDS_ZONE_LINES = 4  # Lines searched for the morning line (header line excluded)
SILKS_SCAN_LINES = 8  # Non-empty lines considered for the silks line
SILKS_MIN_LENGTH = 8
SILKS_AFTER_OWNER_MIN_LENGTH = 6
JOCKEY_SCAN_LINES = 10

# Sex abbreviations as printed before the age: "B. f. 3", "Ch. g. 4"
# b=bred/unknown, c=colt, f=filly, g=gelding, h=horse, m=mare, r=ridgling
SEX_CODES = "bcfghmr"

# ===================== Key/Value Labels =====================
OWNER_LABELS = ("Own", "Owner")
SIRE_LABEL = "Sire"
DAM_LABEL = "Dam"
BREEDER_LABEL = "Brdr"
TRAINER_LABEL = "Trnr"

# ===================== Surface Records =====================
# Lifetime record lines: "Fst 4 1-1-0 $42,150 88", "Trf 0 0-0-0 $0"
# Matched case-insensitively; the key in the output is the spelling below.
SURFACE_CODES = ("Fst", "Off", "Dis", "Trf", "AW", "ft", "fm", "yl")
MAX_SURFACE_LINE = 160

# ===================== Workouts =====================
# "25Oct SA 4f ft :47« H 12/62", "×26Oct SA 4f ft :47¨ H 1/11"
WORKOUT_BULLET = "×"
WORKOUT_SURFACES = ("ft", "fm", "my", "yl", "sf", "gd", "sy", "tr.t")
MAX_WORKOUT_LINE = 200

# ===================== Stat Lines & Notes =====================
STAT_KEYWORDS = ("Sire Stats", "Dam'sSire", "SoldAt", "StudFee", "Prime Power", "JKYw")
STAT_LINE_MARKERS = ("ñ", "×", "—", "•")

# QuickPlay comment glyphs: ★ positive, ● negative; ñ/× are Brisnet bullets
NOTE_MARKERS = ("ñ", "Ñ", "×", "•", "*", "¶", "-", "—", "+", "★", "●")
NOTE_PHRASES = (
    "Beaten by weaker",
    "Failed as favorite",
    "Won last race",
    "Moves up in class",
    "Finished 3rd in last race",
)

# ===================== Past Performance Rows =====================
PP_SECTION_HEADER = r"DATE\s+TRK"
MAX_CONTINUATION_LINES = 5
SPEED_FIGURE_TAIL = 40  # Max characters allowed after the figure

# Ordered: specific forms first so "OC40k" wins over "OC", "Mdn 50k" over "Mdn"
RACE_TYPE_CODES = (
    r"OC\d+k",
    r"Mdn\s+\d+k",
    r"MC\d+",
    r"Clm\d+",
    r"A\d+k",
    r"Alw\d*",
    r"Mdn",
    r"OC",
    r"G\d",
    r"n1x",
    r"n2x",
    r"n3x",
    r"Regret",
    r"PuckerUp",
    r"QEIICup",
    r"DGOaks",
    r"PENOaksB",
    r"SarOkInv",
    r"MsGrillo",
)

# Trip comment keywords; a comment runs from the keyword to the next "." or ";"
COMMENT_KEYWORDS = (
    "Ins",
    "Stmbld",
    "Stumble",
    "brush",
    "drift",
    "bumped",
    "bpd",
    "split",
    "rallied",
    "tracked",
    "fought",
)

# Distance glyphs Brisnet uses for fractional miles (1ˆ = 1 1/16, 1‰ = 1 1/8 ...)
DISTANCE_GLYPHS = ("ˆ", "‰", "„", "…")

# ===================== Field Coverage =====================
LOW_COVERAGE_THRESHOLD = 0.5

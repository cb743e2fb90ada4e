import re


# Sinhala letters, vowel signs and al-lakuna (U+0D85..U+0DF3)
SINHALA_RUN = re.compile(r"[අ-ෳ]+")
SINHALA_CHAR = re.compile(r"[අ-ෳ]")

# Runs shorter than this (pronouns like "මම") match too much on their own
MIN_STANDALONE_RUN = 4


def sinhala_runs(text: str) -> list[str]:
    return SINHALA_RUN.findall(text or "")


def first_sinhala_keyword(text: str) -> str:
    """Derive the anchor substring used to match rendered output.

    Returns the first run of Sinhala characters, joined with the second run
    when the first one is shorter than four characters. Returns "" when the
    text has no Sinhala characters at all.
    """
    runs = sinhala_runs(text)
    if not runs:
        return ""
    if len(runs) > 1 and len(runs[0]) < MIN_STANDALONE_RUN:
        return f"{runs[0]} {runs[1]}"
    return runs[0]


def has_sinhala(text: str) -> bool:
    return bool(SINHALA_CHAR.search(text or ""))

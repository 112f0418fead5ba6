import logging
import math
from collections import Counter

from cipher_engine.charset import as_charset, CharacterSet
from cipher_engine.languages import LANGUAGE_FREQUENCIES, get_profile

logger = logging.getLogger(__name__)


def tally(text, charset=None):
    """
    Count each charset symbol in `text`.  Every symbol of the charset is
    present in the result (zero when unseen); anything else is ignored.
    """
    charset = as_charset(charset)
    freq = Counter({sym: 0 for sym in charset})
    for sym in charset.tokenize(text):
        if sym in charset:
            freq[sym] += 1
    return freq


def chi_square(freq, profile):
    """
    Chi-Square distance of observed counts from a language profile.
    Lower is a better fit.  Symbols the profile does not expect (missing
    or 0.0) are skipped rather than penalised.
    """
    total = sum(count for sym, count in freq.items() if sym in profile)
    if total == 0:
        return 0.0
    chi2 = 0.0
    for sym, observed in freq.items():
        expected = profile.get(sym)
        if expected:
            chi2 += (observed - total * expected) ** 2 / (total * expected)
    return chi2


def chi_square_text(text, charset, profile):
    return chi_square(tally(text, charset), profile)


def crib_chi_square(match_freq, freq, profile):
    """
    Score a partial hypothesis.  The numerator only sees the counts in
    `match_freq` while `total` is the volume of the whole message in `freq`,
    so a short crib is judged against the full message length.
    """
    total = sum(freq.values())
    if total == 0:
        return 0.0
    chi2 = 0.0
    for sym, observed in match_freq.items():
        expected = profile.get(sym)
        if expected:
            chi2 += (observed - total * expected) ** 2 / (total * expected)
    return chi2


def rank_languages(text, profiles=None):
    """
    [(lang, chi2), ...] best fit first.  Each language is scored over its
    own charset; languages with no profile or no matching symbols are left
    out.
    """
    if profiles is None:
        profiles = LANGUAGE_FREQUENCIES
    scores = []
    for lang, profile in profiles.items():
        if not profile:
            continue
        freq = tally(text, CharacterSet.for_language(lang))
        if not any(freq[sym] for sym in freq if sym in profile):
            continue
        scores.append((lang, chi_square(freq, profile)))
    scores.sort(key=lambda x: x[1])
    logger.debug("language ranking: %s", scores[:3])
    return scores


def index_of_coincidence(freq):
    n = sum(freq.values())
    if n < 2:
        return 0.0
    return sum(v * (v - 1) for v in freq.values()) / (n * (n - 1))


def analyse(message, lang="en"):
    """
    Summary statistics for the frequency tool: common trigrams and bigrams,
    letter counts (most frequent first), index of coincidence, Chi-Square
    against `lang` and a guess at the cipher family.
    """
    charset = CharacterSet.for_language(lang)
    symbols = [s for s in charset.tokenize(message) if s in charset]
    n = len(symbols)
    profile = get_profile(lang)
    freq = tally(message, charset)

    freq_dist = sorted(
        ((sym, count) for sym, count in freq.items() if count),
        key=lambda x: x[1], reverse=True,
    )
    ic = index_of_coincidence(freq)
    chi2 = chi_square(freq, profile)

    # --- Correlation with the language distribution ---
    letters = [sym for sym in charset if sym in profile]
    corr = 0.0
    if n and letters:
        expected = [profile[sym] for sym in letters]
        observed = [freq[sym] / n for sym in letters]
        mean1 = sum(expected) / len(letters)
        mean2 = sum(observed) / len(letters)
        numerator = sum((a - mean1) * (b - mean2) for a, b in zip(expected, observed))
        denominator = math.sqrt(
            sum((a - mean1) ** 2 for a in expected) *
            sum((b - mean2) ** 2 for b in observed)
        )
        corr = numerator / denominator if denominator else 0.0

    if n == 0:
        cipher_type = "No alphabetic content"
    elif n < 20:
        cipher_type = "Uncertain: text too short for reliable stats"
    elif corr > 0.80 and chi2 < 200:
        cipher_type = "Transposition (letter order changed, frequencies intact)"
    elif ic >= 0.058:
        cipher_type = "Monoalphabetic Substitution (Aristocrat, Patristocrat, etc.)"
    elif ic < 0.050:
        cipher_type = "Polyalphabetic Substitution (Vigenère, Porta or similar)"
    else:
        cipher_type = "Uncertain: possibly mixed or short text"

    joined = "".join(symbols)
    trigrams = Counter(joined[i:i + 3] for i in range(len(joined) - 2)).most_common(10)
    bigrams = Counter(joined[i:i + 2] for i in range(len(joined) - 1)).most_common(10)

    return {
        "trigrams": trigrams,
        "bigrams": bigrams,
        "frequencies": freq_dist,
        "ioc": ic,
        "chi_square": chi2,
        "correlation": corr,
        "cipher_type": cipher_type,
    }

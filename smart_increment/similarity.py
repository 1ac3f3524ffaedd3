from .number_codec import strip_numbers

EXACT = 1.0
SAME_SKELETON = 0.9


def score(template_text: str, candidate_text: str) -> float:
    """How much candidate_text looks like template_text, from 0.0 to 1.0.

    Identical strings score 1.0 and strings that only differ in their numbers
    score 0.9. Anything else falls back to the share of positions, counted
    from the start, that hold the same character in both strings.
    """
    if template_text == candidate_text:
        return EXACT
    if not template_text or not candidate_text:
        return 0.0

    if strip_numbers(template_text) == strip_numbers(candidate_text):
        return SAME_SKELETON

    shorter, longer = sorted((template_text, candidate_text), key=len)
    same = sum(1 for a, b in zip(shorter, longer) if a == b)
    return same / len(longer)

DRAWING_PROMPT = (
    "You are playing a drawing game. Draw the word \"{word}\" as a simple line sketch.\n"
    "Reply with exactly one SVG document and nothing else.\n"
    "Rules:\n"
    "- Use width=\"400\" height=\"400\" and viewBox=\"0 0 400 400\".\n"
    "- Only basic shapes and paths; no <text>, no scripts, no external references.\n"
    "- Do not write the word or any letters in the drawing."
)

GUESSING_PROMPT = (
    "You are playing a drawing game. Look at the sketch and guess what it shows.\n"
    "Answer with a single lowercase English noun and nothing else."
)

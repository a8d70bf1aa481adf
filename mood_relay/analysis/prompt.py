from __future__ import annotations


def build_gemini_prompt(*, text: str, tone: str) -> str:
    """
    Prompt for Gemini `generateContent`.

    `text` and `tone` are embedded verbatim; the model is asked for a JSON object with
    keys mood, emotions, suggestedResponse, writingStyle.
    """

    return "\n".join(
        [
            f"Analyze the following text in a {tone} tone and provide:",
            "",
            "1. Mood label (single word or short phrase)",
            "2. Emotional tone analysis (3-4 key emotions detected)",
            "3. Suggested empathetic response",
            "4. Writing style observations",
            "",
            f'Text to analyze: "{text}"',
            "",
            "Return the response as a JSON object with these exact keys: "
            "mood, emotions, suggestedResponse, writingStyle.",
        ]
    )


def build_deepseek_prompt(*, text: str, tone: str) -> str:
    """Prompt for DeepSeek chat completions (single user message)."""

    return "\n".join(
        [
            f"Analyze the following text in a {tone} tone and provide a JSON response "
            "with these exact fields:",
            "- mood: single word or short phrase describing the overall mood",
            "- emotions: array of 3-4 key emotions detected  ",
            "- suggestedResponse: an empathetic response paragraph",
            "- writingStyle: observations about writing style and tone",
            "",
            f'Text: "{text}"',
        ]
    )

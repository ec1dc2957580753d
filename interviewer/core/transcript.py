import re

AGENT_LABEL = "**AI interviewer:**"


def format_transcript(transcript: str, name: str) -> str:
    """Relabel the raw ``Agent:``/``User:`` speaker tags and space out lines."""
    if not transcript:
        return ""
    user_label = f"**{name or 'Candidate'}:**"
    updated = transcript.replace("Agent:", AGENT_LABEL).replace("User:", user_label)
    return re.sub(r"\r\n|\r|\n", "\n\n", updated)

"""Chat agent: prompts, model construction and the streaming tool loop."""

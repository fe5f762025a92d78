from typing import Protocol


class TextGenerator(Protocol):
    def generate_text(self, prompt: str, max_tokens: int) -> str:
        ...

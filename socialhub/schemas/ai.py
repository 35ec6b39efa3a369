from pydantic import BaseModel, field_validator


class GenerateContentRequest(BaseModel):
    prompt: str
    type: str = "post"  # post, comment, bio; anything else gets a generic assistant

    @field_validator("prompt")
    @classmethod
    def check_prompt(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Prompt is required")
        return value


class GeneratedContent(BaseModel):
    content: str

"""Typed failures surfaced by the recipe import pipeline.

Each error carries a stable ``error_code`` for API clients and a short
``user_message`` that is safe to show to an end user.
"""

from typing import Optional

from recipe_importer.app.services.recipe_parsing.models import PlatformTag


class RecipeImportError(Exception):
    error_code = "import_failed"
    status_code = 500
    default_message = "Could not import this recipe."

    def __init__(self, user_message: Optional[str] = None):
        self.user_message = user_message or self.default_message
        super().__init__(self.user_message)


class UnsupportedSource(RecipeImportError):
    error_code = "unsupported_source"
    status_code = 400
    default_message = "This link type is not supported."


class NoContentExtracted(RecipeImportError):
    error_code = "no_content"
    status_code = 422

    def __init__(self, platform: str, user_message: Optional[str] = None):
        self.platform = platform
        super().__init__(user_message or self.hint_for(platform))

    @staticmethod
    def hint_for(platform: str) -> str:
        if platform == "blog":
            return (
                "Could not find a recipe on this page.\n\n"
                "Try one of these options:\n"
                "- Paste the recipe text manually\n"
                "- Use a different recipe URL"
            )
        try:
            name = PlatformTag(platform).display_name
        except ValueError:
            name = str(platform).capitalize()
        return (
            f"Could not extract recipe from {name} video. "
            "The video may not have captions available.\n\n"
            "Try one of these options:\n"
            "- Paste the recipe text manually\n"
            "- Use a recipe blog URL instead\n"
            "- Copy the video description and paste it"
        )


class NoProviderConfigured(RecipeImportError):
    error_code = "no_provider"
    status_code = 503
    default_message = (
        "No AI service configured. Set CLOUDFLARE_ACCOUNT_ID + CLOUDFLARE_API_TOKEN or GEMINI_API_KEY."
    )


class ProviderRequestFailed(RecipeImportError):
    error_code = "provider_failed"
    status_code = 502
    default_message = "Failed to extract recipe with AI. Please try again."

    def __init__(self, provider: str, upstream_status: Optional[int] = None):
        self.provider = provider
        self.upstream_status = upstream_status
        super().__init__()


class InvalidProviderResponse(RecipeImportError):
    error_code = "invalid_provider_response"
    status_code = 502
    default_message = "Could not parse recipe from AI response."


class InputTooShort(RecipeImportError):
    error_code = "input_too_short"
    status_code = 400
    default_message = "Please provide more recipe content to extract from."


class TranscriptUnavailable(Exception):
    """A transcript strategy produced nothing; never shown to users."""

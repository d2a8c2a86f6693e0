"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use THEMECSS_ prefix (e.g., THEMECSS_ABORT_ON_EXCLUDE=false).

Settings can also be loaded from a .env file in the project root.
"""

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use THEMECSS_ prefix.

    Examples:
        THEMECSS_DEFAULT_MEDIA_QUERY=global
        THEMECSS_ABORT_ON_EXCLUDE=false
        THEMECSS_MULTI_VALUED_PROPERTIES='["background-image", "background", "mask-image"]'
    """

    model_config = SettingsConfigDict(
        env_prefix="THEMECSS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Rule defaults
    default_media_query: str = Field(
        default="global",
        description="Media query bucket for rules that don't name one (rendered without @media)",
    )

    value_token: str = Field(
        default="$",
        description="Token inside a rule's value_pattern that is replaced by the value",
    )

    default_config_id: str = Field(
        default="global",
        description="Configuration id used for pattern_replace and stored value lookups",
    )

    # Style tree configuration
    multi_valued_properties: List[str] = Field(
        default_factory=lambda: ["background-image", "background"],
        description="Properties that accumulate values across rules instead of overwriting",
    )

    abort_on_exclude: bool = Field(
        default=True,
        description="An excluded rule stops processing of the remaining rules of the field",
    )

    background_default_element: str = Field(
        default="body",
        description="Selector used by background fields when a rule has no element",
    )

    # Render configuration
    default_render_context: str = Field(
        default="frontend",
        description="Render context used when none is given (frontend or editorPreview)",
    )

    # Output configuration
    css_filename: str = Field(
        default="styles.css",
        description="Name of the stylesheet written by the CLI",
    )

    minify_output: bool = Field(
        default=False,
        description="Minify generated CSS output",
    )

    def property_isMultiValued(self, property_name: str) -> bool:
        """
        Check if a CSS property accumulates values across rules.

        Args:
            property_name: CSS property name

        Returns:
            True if the property is in multi_valued_properties

        Example:
            >>> settings = AppSettings()
            >>> settings.property_isMultiValued('background-image')
            True
        """
        return property_name in self.multi_valued_properties

    def mediaQuery_isDefault(self, media_query: str) -> bool:
        """Check if a media query bucket is the unconditional one"""
        return media_query == self.default_media_query


# Singleton instance - import this in your code
appsettings = AppSettings()

"""Core configuration settings for API listing generation.

Settings are loaded from environment variables with .env file support via
pydantic-settings. Every variable uses the ``JAVA_APIVIEW_`` prefix.

Environment variables:
    JAVA_APIVIEW_SHOW_JAVADOC: Render declaration javadoc as comment tokens
    JAVA_APIVIEW_ANNOTATION_ALLOWLIST: JSON list of annotation names to render
    JAVA_APIVIEW_EXCLUDED_PATH_MARKER: Substring marking private sub-packages
    JAVA_APIVIEW_SOURCE_SUFFIX: Suffix of source compilation units
    JAVA_APIVIEW_DROP_AMBIGUOUS_LINKS: Drop links for simple names declared twice

Configuration precedence:
    1. Environment variables (highest priority)
    2. .env file in current directory
    3. Default values

Example:
    >>> from java_apiview.settings import settings
    >>> settings.show_javadoc
    False
    >>> custom = settings.model_copy(update={"show_javadoc": True})

Note:
    Settings are frozen after initialization. Derive a changed copy with
    ``model_copy(update=...)`` and pass it to the Analyser explicitly.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ANNOTATION_ALLOWLIST: tuple[str, ...] = (
    "Deprecated",
    "Override",
    "ServiceClient",
    "ServiceClientBuilder",
    "Fluent",
    "Immutable",
)


class Settings(BaseSettings):
    """Configuration for the public API extraction pipeline.

    Attributes:
        show_javadoc: Emit javadoc of rendered declarations as COMMENT tokens.
                      Package documentation from package-info files is always
                      emitted regardless of this flag.

        annotation_allowlist: Annotation simple names rendered on declarations,
                              in the order they are emitted.

        service_client_annotation: Type annotation that switches on the
                                   Service / Non-Service method grouping.

        service_method_annotation: Method annotation marking a service method.

        excluded_path_marker: Files whose path contains this substring are
                              skipped (private sub-packages).

        source_suffix: Only files ending with this suffix are parsed.

        drop_ambiguous_links: When two public types share a simple name, drop
                              the link instead of pointing at the last one.
    """

    model_config = SettingsConfigDict(
        env_prefix="JAVA_APIVIEW_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    show_javadoc: bool = False
    annotation_allowlist: tuple[str, ...] = DEFAULT_ANNOTATION_ALLOWLIST
    service_client_annotation: str = "ServiceClient"
    service_method_annotation: str = "ServiceMethod"
    excluded_path_marker: str = "implementation"
    source_suffix: str = ".java"
    drop_ambiguous_links: bool = False


settings = Settings()
"""Default settings instance, used when no Settings object is passed explicitly."""

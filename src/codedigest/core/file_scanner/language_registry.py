"""
Language registry for mapping file extensions to language tags.
"""

import logging
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

# Default path to the languages configuration file
_DEFAULT_LANGUAGES_CONFIG = Path(__file__).parent.parent / "languages.yaml"

UNKNOWN_LANGUAGE = "unknown"


class LanguageRegistry:
    """
    Registry mapping file extensions to the language tags used in the summary.

    The tag serves two purposes: it labels the fenced code block written for
    a file and it selects the comment rules applied to the file's content.
    Files whose extension is not registered are left out of the summary.

    Example:
        >>> registry = LanguageRegistry(load_defaults=False)
        >>> registry.register("kotlin", [".kt", ".kts"])
        >>> registry.detect(".KT")
        'kotlin'
    """

    def __init__(self, load_defaults: bool = True):
        """
        Initialize the language registry.

        Args:
            load_defaults: If True, load the packaged languages.yaml mappings.
        """
        self._extension_to_language: dict[str, str] = {}
        self._language_to_extensions: dict[str, set[str]] = {}

        if load_defaults:
            self._load_from_yaml(_DEFAULT_LANGUAGES_CONFIG)

    @classmethod
    def from_yaml(cls, config_path: Path | str) -> "LanguageRegistry":
        """
        Create a LanguageRegistry from a YAML configuration file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            LanguageRegistry instance containing only the file's mappings

        Raises:
            FileNotFoundError: If the config file doesn't exist
            ValueError: If the config file format is invalid
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Languages config not found: {config_path}")

        registry = cls(load_defaults=False)
        registry._load_from_yaml(config_path)
        return registry

    def _load_from_yaml(self, config_path: Path) -> None:
        """
        Load language mappings from a YAML file.

        Expected format:
            language_tag:
              - .ext1
              - .ext2
        """
        if not config_path.exists():
            logger.warning(f"Languages config not found: {config_path}, using empty registry")
            return

        try:
            data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            logger.error(f"Failed to parse languages config: {e}")
            raise ValueError(f"Invalid YAML in languages config: {e}") from e

        if data is None:
            return

        if not isinstance(data, dict):
            raise ValueError(
                f"Invalid languages config format: expected dict, got {type(data).__name__}"
            )

        for language, extensions in data.items():
            if not isinstance(extensions, list):
                logger.warning(
                    f"Invalid extensions for {language}: expected list, got {type(extensions).__name__}"
                )
                continue
            for ext in extensions:
                self._add_mapping(str(ext), str(language))

    def _add_mapping(self, extension: str, language: str) -> None:
        """Add a single extension-language mapping, replacing any previous owner."""
        ext_lower = extension.lower()

        previous = self._extension_to_language.get(ext_lower)
        if previous is not None and previous != language:
            self._language_to_extensions[previous].discard(ext_lower)

        self._extension_to_language[ext_lower] = language
        self._language_to_extensions.setdefault(language, set()).add(ext_lower)

    def register(self, language: str, extensions: list[str]) -> "LanguageRegistry":
        """
        Register a language tag with its file extensions.

        Args:
            language: Language tag (e.g., 'sql', 'yaml')
            extensions: File extensions including the dot (e.g., ['.sql'])

        Returns:
            Self for method chaining
        """
        for ext in extensions:
            self._add_mapping(ext, language)
        return self

    def unregister(self, language: str) -> "LanguageRegistry":
        """Remove a language tag and all of its extensions."""
        for ext in self._language_to_extensions.pop(language, set()):
            self._extension_to_language.pop(ext, None)
        return self

    def detect(self, extension: str) -> str:
        """
        Detect the language tag for an extension.

        Args:
            extension: File extension including the dot (e.g., '.py')

        Returns:
            Language tag, or 'unknown' if the extension is not mapped
        """
        return self._extension_to_language.get(extension.lower(), UNKNOWN_LANGUAGE)

    def detect_from_path(self, file_path: Path) -> str:
        """Detect the language tag from the text after the last dot of a file name."""
        return self.detect(file_path.suffix)

    def get_extensions(self, language: str) -> set[str]:
        """Get all registered extensions for a language tag."""
        return self._language_to_extensions.get(language, set()).copy()

    def get_all_extensions(self) -> set[str]:
        """Get all registered file extensions."""
        return set(self._extension_to_language.keys())

    def get_all_languages(self) -> set[str]:
        """Get all language tags that still own at least one extension."""
        return {lang for lang, exts in self._language_to_extensions.items() if exts}

    def is_supported(self, extension: str) -> bool:
        """Check if an extension is registered."""
        return extension.lower() in self._extension_to_language


# Global default registry instance
_default_registry = LanguageRegistry()


def get_default_registry() -> LanguageRegistry:
    """Get the global default language registry."""
    return _default_registry

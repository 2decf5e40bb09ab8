"""
Settings controlling the backport pipeline itself.
"""

from .helpers import SettingsSection

DEFAULT_NAMESPACE = "minecraft"
DEFAULT_HANDHELD_PARENT = "minecraft:item/handheld"
DEFAULT_GENERATED_PARENT = "minecraft:item/generated"


class PipelineSettings(SettingsSection):
    """Output clearing, asset namespace and the parents given to generated models."""

    @property
    def clear_output(self) -> bool:
        """Whether the output directory is emptied before a run."""
        return self._get_bool("pipeline/clear_output", True)

    @clear_output.setter
    def clear_output(self, value: bool) -> None:
        self.settings.setValue("pipeline/clear_output", value)

    @property
    def namespace(self) -> str:
        return self._get_str("pipeline/namespace", DEFAULT_NAMESPACE)

    @namespace.setter
    def namespace(self, value: str) -> None:
        self.settings.setValue("pipeline/namespace", value)

    @property
    def handheld_parent(self) -> str:
        """Parent of generated predicate-override models."""
        return self._get_str("pipeline/handheld_parent", DEFAULT_HANDHELD_PARENT)

    @handheld_parent.setter
    def handheld_parent(self, value: str) -> None:
        self.settings.setValue("pipeline/handheld_parent", value)

    @property
    def generated_parent(self) -> str:
        """Parent of generated plain item models."""
        return self._get_str("pipeline/generated_parent", DEFAULT_GENERATED_PARENT)

    @generated_parent.setter
    def generated_parent(self, value: str) -> None:
        self.settings.setValue("pipeline/generated_parent", value)

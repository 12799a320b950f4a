"""External-tool registry for the Google cluster adapter.

Each adapter operation that shells out has exactly one :class:`ToolCommand`
naming the CLI it runs and the command template it renders. Region and VM
size lookups go through the ``az`` CLI rather than ``gcloud``; keeping that
here makes the vendor of every command visible in one place.

Templates use ``str.format`` fields. ``{tool}`` is replaced by the configured
executable, the remaining fields by the call's parameters.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from string import Formatter
from types import MappingProxyType

from clusterwiz.config import GoogleProviderConfig

__all__ = [
    "COMMANDS",
    "CloudTool",
    "Operation",
    "ToolCommand",
    "LOCATIONS_QUERY",
    "render",
]

#: JMESPath projection for ``az account list-locations``
LOCATIONS_QUERY = "[].{name:name,displayName:displayName}"


class CloudTool(str, Enum):
    """External CLIs the adapter drives."""

    GCLOUD = "gcloud"
    AZ = "az"

    def executable(self, settings: GoogleProviderConfig) -> str:
        """Executable configured for this tool."""
        if self is CloudTool.AZ:
            return settings.az_path
        return settings.gcloud_path


class Operation(str, Enum):
    """Logical operations that invoke an external CLI."""

    LIST_PROJECTS = "list_projects"
    SET_PROJECT = "set_project"
    LIST_CLUSTERS = "list_clusters"
    LIST_LOCATIONS = "list_locations"
    LIST_VM_SIZES = "list_vm_sizes"
    CREATE_CLUSTER = "create_cluster"
    GET_CREDENTIALS = "get_credentials"


@dataclass(frozen=True, slots=True)
class ToolCommand:
    """Command template for one operation.

    Attributes:
        operation: The operation this command implements.
        tool: CLI that runs the command.
        template: ``str.format`` template; ``{tool}`` is the executable.
    """

    operation: Operation
    tool: CloudTool
    template: str

    @property
    def parameters(self) -> frozenset[str]:
        """Template fields other than ``{tool}``."""
        return frozenset(
            name
            for _, name, _, _ in Formatter().parse(self.template)
            if name and name != "tool"
        )

    def render(self, executable: str, **params: str) -> str:
        """Render the command line.

        Raises:
            ValueError: If a template parameter is missing or unexpected.
        """
        supplied = frozenset(params)
        if supplied != self.parameters:
            raise ValueError(
                f"{self.operation.value} expects parameters "
                f"{sorted(self.parameters)}, got {sorted(supplied)}"
            )
        return self.template.format(tool=executable, **params)


COMMANDS: MappingProxyType[Operation, ToolCommand] = MappingProxyType(
    {
        command.operation: command
        for command in (
            ToolCommand(
                Operation.LIST_PROJECTS,
                CloudTool.GCLOUD,
                "{tool} projects list --format=json",
            ),
            ToolCommand(
                Operation.SET_PROJECT,
                CloudTool.GCLOUD,
                '{tool} config set project "{project}"',
            ),
            ToolCommand(
                Operation.LIST_CLUSTERS,
                CloudTool.GCLOUD,
                "{tool} container clusters list --format=json",
            ),
            ToolCommand(
                Operation.LIST_LOCATIONS,
                CloudTool.AZ,
                "{tool} account list-locations --query {query} -ojson",
            ),
            ToolCommand(
                Operation.LIST_VM_SIZES,
                CloudTool.AZ,
                '{tool} vm list-sizes -l "{location}" -ojson',
            ),
            ToolCommand(
                Operation.CREATE_CLUSTER,
                CloudTool.GCLOUD,
                '{tool} container clusters create "{cluster_name}" '
                '--zone "{location}" --async',
            ),
            ToolCommand(
                Operation.GET_CREDENTIALS,
                CloudTool.GCLOUD,
                '{tool} container clusters get-credentials "{cluster_name}"',
            ),
        )
    }
)


def render(operation: Operation, settings: GoogleProviderConfig, **params: str) -> str:
    """Render the registered command line for ``operation``."""
    command = COMMANDS[operation]
    return command.render(command.tool.executable(settings), **params)

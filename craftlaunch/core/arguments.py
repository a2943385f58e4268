import shlex
from typing import List, Tuple
from pydantic import BaseModel

from craftlaunch.endpoints.vanilla import VersionDescriptor


class LaunchContext(BaseModel):
    """Runtime values for placeholder substitution. Never written to disk."""
    username: str
    version_id: str
    game_directory: str
    assets_root: str
    assets_index_name: str
    version_type: str = "release"


def substitute(template: str, key: str, value: str) -> str:
    """Replaces every literal ${key} in template. Plain text replacement, no word boundaries."""
    return template.replace("${" + key + "}", value)


def game_argument_template(descriptor: VersionDescriptor) -> str:
    """
    The legacy minecraftArguments string when present, else the plain string
    entries of arguments.game joined by spaces. Conditional (object) entries
    are dropped without evaluating their rules.
    """
    if descriptor.minecraftArguments:
        return descriptor.minecraftArguments
    if descriptor.arguments is None:
        return ""
    return " ".join(arg for arg in descriptor.arguments.game if isinstance(arg, str))


def _substitutions(context: LaunchContext) -> List[Tuple[str, str]]:
    # Order matters: applied first to last. Tokens are "0" since there is no authentication.
    return [
        ("auth_player_name", context.username),
        ("version_name", context.version_id),
        ("game_directory", context.game_directory),
        ("assets_root", context.assets_root),
        ("auth_xuid", "0"),
        ("auth_uuid", "0"),
        ("auth_access_token", "0"),
        ("clientid", "0"),
        ("user_type", "legacy"),
        ("version_type", context.version_type),
        ("assets_index_name", context.assets_index_name),
        # pre-1.13 templates
        ("auth_session", "0"),
        ("user_properties", "{}"),
        ("game_assets", context.assets_root),
    ]


def expand_game_arguments(template: str, context: LaunchContext) -> List[str]:
    """Fills every known placeholder and splits the result into argv tokens."""
    expanded = template
    for key, value in _substitutions(context):
        expanded = substitute(expanded, key, shlex.quote(value))
    return shlex.split(expanded)

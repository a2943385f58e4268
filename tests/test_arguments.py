"""
Tests for placeholder substitution and game argument templates.
"""

from craftlaunch.core.arguments import (
    LaunchContext,
    expand_game_arguments,
    game_argument_template,
    substitute,
)
from craftlaunch.endpoints.vanilla import VersionDescriptor


def make_context(**overrides):
    values = dict(
        username="alice",
        version_id="1.19.4",
        game_directory="/games/profiles/1.19.4",
        assets_root="/games/assets",
        assets_index_name="3",
    )
    values.update(overrides)
    return LaunchContext(**values)


class TestSubstitute:
    def test_single_token(self):
        assert substitute("--username ${auth_player_name}", "auth_player_name", "alice") == "--username alice"

    def test_every_occurrence(self):
        assert substitute("${a}-${a}", "a", "x") == "x-x"

    def test_other_tokens_untouched(self):
        assert substitute("${a} ${ab}", "a", "x") == "x ${ab}"

    def test_not_boundary_aware(self):
        assert substitute("pre${a}post", "a", "X") == "preXpost"


class TestTemplate:
    def test_structured_arguments_skip_conditionals(self, descriptor_doc):
        template = game_argument_template(VersionDescriptor.model_validate(descriptor_doc))
        assert template.startswith("--username ${auth_player_name} --version ${version_name}")
        assert "--demo" not in template

    def test_legacy_string_used_verbatim(self, descriptor_doc):
        descriptor_doc["minecraftArguments"] = "${auth_player_name} ${auth_session}"
        template = game_argument_template(VersionDescriptor.model_validate(descriptor_doc))
        assert template == "${auth_player_name} ${auth_session}"

    def test_no_arguments_at_all(self, descriptor_doc):
        del descriptor_doc["arguments"]
        assert game_argument_template(VersionDescriptor.model_validate(descriptor_doc)) == ""


class TestExpand:
    def test_known_placeholders(self, descriptor_doc):
        template = game_argument_template(VersionDescriptor.model_validate(descriptor_doc))

        args = expand_game_arguments(template, make_context())

        assert args == [
            "--username", "alice",
            "--version", "1.19.4",
            "--gameDir", "/games/profiles/1.19.4",
            "--assetsDir", "/games/assets",
            "--assetIndex", "3",
            "--accessToken", "0",
            "--versionType", "release",
        ]

    def test_paths_with_spaces_stay_one_argument(self):
        args = expand_game_arguments("--gameDir ${game_directory}", make_context(game_directory="/My Games/p"))
        assert args == ["--gameDir", "/My Games/p"]

    def test_legacy_placeholders(self):
        args = expand_game_arguments(
            "--session ${auth_session} --userProperties ${user_properties} --uuid ${auth_uuid} --userType ${user_type}",
            make_context(),
        )
        assert args == ["--session", "0", "--userProperties", "{}", "--uuid", "0", "--userType", "legacy"]

    def test_unknown_placeholder_left_alone(self):
        assert expand_game_arguments("--width ${resolution_width}", make_context()) == ["--width", "${resolution_width}"]

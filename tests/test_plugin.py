import json

import pytest

from eamcore.plugin import (
    Module,
    Plugin,
    PluginData,
    Uplugin,
    parse_module,
    parse_plugin,
    parse_uplugin,
    read_uplugin,
)


def test_empty_object_gives_defaults():
    assert parse_uplugin("{}") == Uplugin()


def test_defaults_are_empty():
    descriptor = Uplugin()
    assert descriptor.friendly_name == ""
    assert descriptor.localization_targets == []
    assert descriptor.modules is None


def test_parse_full_descriptor():
    text = json.dumps(
        {
            "FileVersion": 3,
            "Version": 7,
            "VersionName": "1.2",
            "FriendlyName": "Sample Plugin",
            "Category": "Other",
            "EnabledByDefault": True,
            "CanContainContent": False,
            "SupportedTargetPlatforms": ["Linux", "Win64"],
            "PreBuildSteps": {"Linux": ["echo one"]},
            "LocalizationTargets": [{"Name": "Sample"}],
            "Modules": [
                {"Name": "SampleRuntime", "Type": "Runtime", "LoadingPhase": "Default"}
            ],
            "Plugins": [{"Name": "Other", "Enabled": True, "Optional": True}],
            "SomethingUnknown": 1,
        }
    )
    descriptor = parse_uplugin(text)
    assert descriptor.file_version == 3
    assert descriptor.version == 7
    assert descriptor.version_name == "1.2"
    assert descriptor.friendly_name == "Sample Plugin"
    assert descriptor.enabled_by_default is True
    assert descriptor.can_contain_content is False
    assert descriptor.supported_target_platforms == ["Linux", "Win64"]
    assert descriptor.pre_build_steps == {"Linux": ["echo one"]}
    assert descriptor.localization_targets == [{"Name": "Sample"}]
    assert descriptor.modules == [
        Module(name="SampleRuntime", type_field="Runtime", loading_phase="Default")
    ]
    assert descriptor.plugins == [Plugin(name="Other", enabled=True, optional=True)]


def test_null_optional_is_none():
    assert parse_uplugin('{"Installed": null}').installed is None


def test_module_requires_name():
    with pytest.raises(ValueError):
        parse_module({"Type": "Runtime"})


def test_module_defaults():
    module = parse_module({"Name": "Core"})
    assert module == Module(name="Core")
    assert module.platform_allow_list == []
    assert module.additional_dependencies is None


def test_plugin_defaults():
    plugin = parse_plugin({})
    assert plugin.name == ""
    assert plugin.enabled is False
    assert plugin.marketplace_url is None


@pytest.mark.parametrize(
    "text",
    [
        "not json",
        "[]",
        '{"FileVersion": "3"}',
        '{"FileVersion": true}',
        '{"FriendlyName": null}',
        '{"Modules": [{"Type": "Runtime"}]}',
        '{"SupportedPrograms": ["a", 1]}',
    ],
)
def test_invalid_descriptor_raises(text):
    with pytest.raises(ValueError):
        parse_uplugin(text)


def test_read_missing_file_gives_default(tmp_path):
    assert read_uplugin(tmp_path / "missing.uplugin") == Uplugin()


def test_read_file(tmp_path):
    path = tmp_path / "Sample.uplugin"
    path.write_text('{"FriendlyName": "Sample", "CreatedBy": "Someone"}')
    descriptor = read_uplugin(str(path))
    assert descriptor.friendly_name == "Sample"
    assert descriptor.created_by == "Someone"


def test_read_broken_file_raises(tmp_path):
    path = tmp_path / "Broken.uplugin"
    path.write_text("{ broken")
    with pytest.raises(ValueError):
        read_uplugin(path)


def test_plugin_data_holds_path_and_name():
    data = PluginData("/plugins/Sample/Sample.uplugin", "Sample")
    assert data.path == "/plugins/Sample/Sample.uplugin"
    assert data.name == "Sample"
    assert data.guid is None
    assert data.uplugin is None
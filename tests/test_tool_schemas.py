import pytest
from pydantic import ValidationError

from codehooks_mcp.errors import UnknownToolError
from codehooks_mcp.tools import ToolDescriptor, ToolRegistry, build_registry
from codehooks_mcp.tools.schemas import (
    DeployCodeArgs,
    FileDeleteArgs,
    ImportArgs,
    LogsArgs,
    QueryCollectionArgs,
    SetProjectArgs,
)

EXPECTED_TOOLS = [
    "set_admin_token",
    "set_project",
    "query_collection",
    "deploy_code",
    "file_upload",
    "file_delete",
    "file_list",
    "create_index",
    "drop_index",
    "create_collection",
    "drop_collection",
    "add_schema",
    "remove_schema",
    "cap_collection",
    "uncap_collection",
    "import",
    "export",
    "kv_get",
    "kv_set",
    "kv_del",
    "logs",
    "docs",
]


def test_catalog_is_complete_and_ordered():
    registry = build_registry()

    assert registry.names() == EXPECTED_TOOLS
    assert len(registry) == 22


def test_all_tool_parameters_have_descriptions():
    """
    Validates that every parameter in every tool's inputSchema has a description.
    """
    missing_descriptions = []

    for descriptor in build_registry().list_tools():
        tool = descriptor.to_tool()
        assert tool.description, f"{tool.name} has no description"
        schema = tool.inputSchema
        assert schema["type"] == "object"
        for param, definition in schema.get("properties", {}).items():
            if not definition.get("description"):
                missing_descriptions.append(f"{tool.name}.{param}")

    assert not missing_descriptions, (
        "The following tool parameters are missing a 'description' field:\n"
        + "\n".join(missing_descriptions)
    )


def test_schemas_use_wire_names():
    registry = build_registry()

    assert "json" in registry.lookup("deploy_code").input_schema()["properties"]
    assert "schema" in registry.lookup("add_schema").input_schema()["properties"]
    assert registry.lookup("query_collection").input_schema()["required"] == ["collection"]
    assert "required" not in registry.lookup("docs").input_schema()


def test_only_configuration_tools_skip_credentials():
    exempt = [d.name for d in build_registry().list_tools() if not d.requires_credentials]

    assert exempt == ["set_admin_token", "set_project"]


def test_lookup_unknown_tool():
    with pytest.raises(UnknownToolError, match="Tool not found: nope"):
        build_registry().lookup("nope")


def test_registry_rejects_duplicate_names():
    descriptor = build_registry().lookup("docs")

    with pytest.raises(ValueError, match="Duplicate tool name"):
        ToolRegistry([descriptor, ToolDescriptor("docs", "again", descriptor.model, descriptor.handler)])


def test_query_limit_defaults_to_100():
    assert QueryCollectionArgs(collection="users").effective_limit == 100
    assert QueryCollectionArgs(collection="users", limit=5).effective_limit == 5


def test_count_query_has_no_default_limit():
    assert QueryCollectionArgs(collection="users", count=True).effective_limit is None
    assert QueryCollectionArgs(collection="users", count=True, limit=7).effective_limit == 7


def test_unknown_arguments_are_ignored():
    args = QueryCollectionArgs.model_validate({"collection": "users", "bogus": 1})

    assert not hasattr(args, "bogus")


def test_wrong_type_is_rejected():
    with pytest.raises(ValidationError):
        QueryCollectionArgs.model_validate({"collection": "users", "limit": "many"})


def test_import_requires_filepath_or_content():
    with pytest.raises(ValidationError, match="filepath"):
        ImportArgs(collection="users")

    assert ImportArgs(collection="users", content="[]").content == "[]"


def test_file_delete_requires_filename_or_match():
    with pytest.raises(ValidationError, match="filename"):
        FileDeleteArgs()

    assert FileDeleteArgs(match=r"^/img/.*\.png$").match


@pytest.mark.parametrize("path", ["/abs/index.js", "../index.js", "src/../../x.js"])
def test_deploy_rejects_paths_outside_project(path):
    with pytest.raises(ValidationError, match="relative"):
        DeployCodeArgs.model_validate({"files": [{"path": path, "content": ""}]})


def test_deploy_requires_files():
    with pytest.raises(ValidationError):
        DeployCodeArgs.model_validate({"files": []})


def test_deploy_accepts_aliases():
    args = DeployCodeArgs.model_validate(
        {"files": [{"path": "index.js", "content": ""}], "json": True, "projectId": "other"}
    )

    assert args.json_ is True
    assert args.main == "index"
    assert args.projectId == "other"


def test_logs_defaults():
    assert LogsArgs().tail == 100
    with pytest.raises(ValidationError):
        LogsArgs(tail=0)


def test_set_project_space_optional():
    assert SetProjectArgs(project="proj1").space is None
    with pytest.raises(ValidationError):
        SetProjectArgs(project="")


@pytest.mark.parametrize("limit", [0, -5])
def test_query_limit_must_be_positive(limit):
    with pytest.raises(ValidationError, match="limit"):
        QueryCollectionArgs(collection="users", limit=limit)

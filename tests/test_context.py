from codehooks_mcp.context import DEFAULT_SPACE, CredentialStore, Credentials


def test_from_env_reads_codehooks_variables(monkeypatch):
    monkeypatch.setenv("CODEHOOKS_PROJECT_NAME", "proj1")
    monkeypatch.setenv("CODEHOOKS_SPACE", "prod")
    monkeypatch.setenv("CODEHOOKS_ADMIN_TOKEN", "tkn_abc123")

    creds = CredentialStore.from_env().current()

    assert creds == Credentials(project="proj1", space="prod", admin_token="tkn_abc123")
    assert creds.is_complete()


def test_from_env_defaults_space_to_dev(monkeypatch):
    monkeypatch.setenv("CODEHOOKS_PROJECT_NAME", "proj1")
    monkeypatch.setenv("CODEHOOKS_SPACE", "")

    assert CredentialStore.from_env().current().space == DEFAULT_SPACE == "dev"


def test_from_env_accepts_project_id(monkeypatch):
    monkeypatch.setenv("CODEHOOKS_PROJECT_ID", "legacy-proj")

    assert CredentialStore.from_env().current().project == "legacy-proj"


def test_missing_lists_env_names():
    assert Credentials().missing() == ["CODEHOOKS_PROJECT_NAME", "CODEHOOKS_ADMIN_TOKEN"]
    assert Credentials(project="  ", admin_token="t").missing() == ["CODEHOOKS_PROJECT_NAME"]
    assert not Credentials(project="p").is_complete()


def test_configure_merges_fields():
    store = CredentialStore(Credentials(project="proj1", space="prod", admin_token="old"))

    store.configure(token="new")
    assert store.current() == Credentials(project="proj1", space="prod", admin_token="new")

    store.configure(project="proj2")
    assert store.current() == Credentials(project="proj2", space="prod", admin_token="new")
    assert store.secret == "new"


def test_configure_empty_space_resets_to_default():
    store = CredentialStore(Credentials(project="proj1", space="prod"))

    assert store.configure(space="").space == "dev"

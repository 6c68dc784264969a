"""Shared fixtures: throwaway git repositories and an in-memory keyring."""

import tempfile
from pathlib import Path

import git
import keyring
import pytest
from keyring.backend import KeyringBackend
from keyring.credentials import SimpleCredential


class MemoryKeyring(KeyringBackend):
    """Keyring backend that can look credentials up by service alone, like the
    Windows and Secret Service backends."""

    priority = 1

    def __init__(self):
        super().__init__()
        self.entries = {}

    def set_password(self, service, username, password):
        self.entries[service] = (username, password)

    def get_password(self, service, username):
        stored = self.entries.get(service)
        if stored is None or stored[0] != username:
            return None
        return stored[1]

    def delete_password(self, service, username):
        self.entries.pop(service, None)

    def get_credential(self, service, username):
        stored = self.entries.get(service)
        if stored is None:
            return None
        return SimpleCredential(*stored)


class PasswordOnlyKeyring(KeyringBackend):
    """Keyring backend keyed by (service, username) that only implements the
    password methods, like the macOS Keychain backend."""

    priority = 1

    def __init__(self):
        super().__init__()
        self.passwords = {}

    def set_password(self, service, username, password):
        self.passwords[(service, username)] = password

    def get_password(self, service, username):
        return self.passwords.get((service, username))

    def delete_password(self, service, username):
        self.passwords.pop((service, username), None)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep the user's LIFELOGR_* and committer variables and local .env out of tests."""
    for name in ("LIFELOGR_REPOSITORY_PATH", "LIFELOGR_PUSH_BY_DEFAULT", "LIFELOGR_CONFIG_DIR",
                 "LIFELOGR_CREDENTIAL_NAMESPACE", "LIFELOGR_CREDENTIAL_USERNAME", "LIFELOGR_LOG_LEVEL",
                 "GIT_COMMITTER_NAME", "GIT_COMMITTER_EMAIL"):
        monkeypatch.delenv(name, raising=False)
    workdir = tmp_path / "cwd"
    workdir.mkdir()
    monkeypatch.chdir(workdir)


@pytest.fixture
def test_repo():
    """Create a temporary Git repository with one commit."""
    with tempfile.TemporaryDirectory() as tmpdir:
        repo_path = Path(tmpdir) / "journal"
        repo = git.Repo.init(repo_path)

        # Configure git
        repo.config_writer().set_value("user", "name", "Test User").release()
        repo.config_writer().set_value("user", "email", "test@example.com").release()

        (repo_path / "README.md").write_text("# Journal\n")
        repo.index.add(["README.md"])
        repo.index.commit("Initial commit")
        repo.close()

        yield repo_path


@pytest.fixture
def anonymous_repo(tmp_path, monkeypatch):
    """Repository with no git identity configured at any level."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))

    repo_path = tmp_path / "anonymous"
    repo = git.Repo.init(repo_path)
    (repo_path / "README.md").write_text("# Journal\n")
    repo.index.add(["README.md"])
    someone = git.Actor("Someone", "someone@example.com")
    repo.index.commit("Initial commit", author=someone, committer=someone)
    with repo.config_reader() as reader:
        if reader.get_value("user", "name", "") or reader.get_value("user", "email", ""):
            pytest.skip("system git config defines an identity")
    repo.close()

    return repo_path


@pytest.fixture
def tracked_repo(test_repo):
    """Repository whose current branch tracks a branch in a local bare remote."""
    remote_path = test_repo.parent / "remote.git"
    git.Repo.init(remote_path, bare=True).close()

    repo = git.Repo(test_repo)
    repo.create_remote("origin", str(remote_path))
    repo.git.push("--set-upstream", "origin", repo.active_branch.name)
    repo.close()

    return test_repo, remote_path


@pytest.fixture
def memory_keyring():
    """In-memory keyring holding credentials for local-path remotes."""
    backend = MemoryKeyring()
    backend.set_password("git:file://", "journal-user", "s3cret")
    return backend


@pytest.fixture
def password_keyring():
    """Password-only keyring holding a GitHub token for 'octocat'."""
    backend = PasswordOnlyKeyring()
    backend.set_password("git:https://github.com", "octocat", "token123")
    return backend


@pytest.fixture
def platform_keyring(memory_keyring):
    """Install the in-memory keyring as the process-wide keyring."""
    previous = keyring.get_keyring()
    keyring.set_keyring(memory_keyring)
    yield memory_keyring
    keyring.set_keyring(previous)


@pytest.fixture
def settings_dir(tmp_path):
    """Directory for the user settings file."""
    return tmp_path / "lifelogr-home"

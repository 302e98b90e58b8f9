"""Tests for the clone_org service."""

import pytest

from conftest import FakeGit, make_repos
from orgcloner.core.errors import RemoteAPIError
from orgcloner.core.types import Outcome, RepoDescriptor
from orgcloner.services.clone import clone_org


class FakeGitHub:
    def __init__(self, repos=None, error=None):
        self.repos = repos or []
        self.error = error
        self.calls = []

    def list_org_repos(self, org, include_archived=True):
        self.calls.append((org, include_archived))
        if self.error:
            raise self.error
        return list(self.repos)


def test_clone_org_end_to_end(tmp_path, sink):
    dest = tmp_path / "out"
    github = FakeGitHub(make_repos(5))
    git = FakeGit(fail={"repo3"})

    result = clone_org(
        org="acme", token="t", dest=str(dest), compress=True, sink=sink, github=github, git=git
    )

    assert sink.messages[0] == "Fetching repos..."
    assert sink.messages[1] == "Cloning and compressing repos..."
    assert sink.messages[-1].startswith("Done! 4/5 succeeded")
    assert sink.percents == [20, 40, 60, 80, 100]
    assert [r.repo.name for r in result.failed] == ["repo3"]
    assert sorted(p.name for p in dest.iterdir()) == [
        "repo1.tar.gz",
        "repo2.tar.gz",
        "repo4.tar.gz",
        "repo5.tar.gz",
    ]


def test_listing_failure_is_fatal_and_clones_nothing(tmp_path, sink):
    github = FakeGitHub(error=RemoteAPIError("HTTP request error: 401", status=401))
    git = FakeGit()

    with pytest.raises(SystemExit) as exc:
        clone_org(org="acme", token="bad", dest=str(tmp_path / "out"), compress=False,
                  sink=sink, github=github, git=git)

    assert exc.value.code == 1
    assert sink.errors == ["HTTP request error: 401"]
    assert git.calls == []
    assert not (tmp_path / "out").exists()


def test_no_repositories(tmp_path, sink):
    result = clone_org(org="empty", token="t", dest=str(tmp_path), compress=False,
                       sink=sink, github=FakeGitHub([]), git=FakeGit())

    assert len(result) == 0
    assert sink.percents == [100]
    assert "No repositories found" in sink.messages[-1]


def test_passes_jobs_and_archived_filter(tmp_path, sink):
    github = FakeGitHub(make_repos(3))

    result = clone_org(org="acme", token="t", dest=str(tmp_path), compress=False, sink=sink,
                       jobs=1, include_archived=False, github=github, git=FakeGit())

    assert github.calls == [("acme", False)]
    assert sink.messages[1] == "Cloning repos..."
    assert all(r.outcome is Outcome.cloned for r in result.results)


def test_colliding_paths_go_to_the_sink(tmp_path, sink):
    repos = [
        RepoDescriptor("https://github.com/acme/app.git", "app"),
        RepoDescriptor("https://github.com/acme/app", "app"),
    ]
    git = FakeGit()

    with pytest.raises(SystemExit) as exc:
        clone_org(org="acme", token="t", dest=str(tmp_path), compress=False,
                  sink=sink, github=FakeGitHub(repos), git=git)

    assert exc.value.code == 1
    assert "would both clone" in sink.errors[0]
    assert git.calls == []


def test_unusable_destination_goes_to_the_sink(tmp_path, sink):
    blocker = tmp_path / "file"
    blocker.write_text("not a directory")

    with pytest.raises(SystemExit):
        clone_org(org="acme", token="t", dest=str(blocker / "out"), compress=False,
                  sink=sink, github=FakeGitHub(make_repos(2)), git=FakeGit())

    assert len(sink.errors) == 1


def test_runs_without_a_sink(tmp_path):
    result = clone_org(org="acme", token="t", dest=str(tmp_path), compress=True,
                       github=FakeGitHub(make_repos(2)), git=FakeGit())

    assert result.ok
    assert (tmp_path / "repo1.tar.gz").is_file()


def test_listing_failure_without_a_sink_exits(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        clone_org(org="acme", token="t", dest=str(tmp_path), compress=False,
                  github=FakeGitHub(error=RemoteAPIError("HTTP request error: 404", status=404)))

    assert exc.value.code == 1
    assert "HTTP request error: 404" in capsys.readouterr().err

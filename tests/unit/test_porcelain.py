"""Repository operation tests: log, show, status, diff, reset and full workflows."""

import pytest
from pushup.core.errors import NotFound, AlreadyExists
from pushup.operations.porcelain import Porcelain


def test_open_finds_repository(repo, monkeypatch):
    subdir = repo.work_tree / 'sub'
    subdir.mkdir()
    monkeypatch.chdir(subdir)
    assert Porcelain.open().repo.work_tree == repo.work_tree


def test_open_outside_repository(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(NotFound, match="Not a pushup repository"):
        Porcelain.open()


def test_init_twice(repo):
    with pytest.raises(AlreadyExists):
        Porcelain.init(str(repo.work_tree))


def test_log_newest_first(repo_with_commits):
    result = repo_with_commits.log()
    assert result.branch == 'main'
    assert [c.message for c in result.commits] == ['Second commit', 'First commit']


def test_log_max_count(repo_with_commits):
    result = repo_with_commits.log(max_count=1)
    assert [c.digest for c in result.commits] == [repo_with_commits.second_commit]


def test_log_empty_repository(ops):
    assert ops.log().commits == []


def test_show_defaults_to_head(repo_with_commits):
    result = repo_with_commits.show()
    assert result.commit_hash == repo_with_commits.second_commit
    assert [d.path for d in result.files] == ['file2.txt']


def test_show_unknown_commit(repo_with_commits):
    with pytest.raises(NotFound):
        repo_with_commits.show('0' * 40)


def test_status_labels(repo_with_commits, write_file):
    ops = repo_with_commits
    write_file('file2.txt', 'Second file\n')
    write_file('new.txt', 'new\n')
    ops.add('file2.txt')
    ops.add('new.txt')

    result = ops.status()
    assert [(e.path, e.label) for e in result.staged] == [
        ('file2.txt', 'unchanged'),
        ('new.txt', 'new file'),
    ]

    write_file('file2.txt', 'Changed\n')
    ops.add('file2.txt')
    labels = {e.path: e.label for e in ops.status().staged}
    assert labels['file2.txt'] == 'modified'


def test_status_clean(repo_with_commits):
    result = repo_with_commits.status()
    assert result.clean
    assert result.head == repo_with_commits.second_commit


def test_diff_nothing_staged(repo_with_commits):
    assert repo_with_commits.diff() == []


def test_diff_staged_against_head(repo_with_commits, write_file):
    ops = repo_with_commits
    write_file('file2.txt', 'Second file\nextra\n')
    ops.add('file2.txt')

    diffs = ops.diff()
    assert len(diffs) == 1
    assert diffs[0].added_lines() == ['extra']
    assert diffs[0].removed_lines() == []


def test_diff_without_commits(ops, write_file):
    write_file('a.txt', 'a\n')
    ops.add('a.txt')
    diffs = ops.diff()
    assert [(d.path, d.is_new) for d in diffs] == [('a.txt', True)]


def test_reset_moves_head_and_branch(repo_with_commits):
    ops = repo_with_commits
    result = ops.reset(ops.first_commit[:7])

    assert result.commit_hash == ops.first_commit
    assert result.previous_head == ops.second_commit
    assert ops.repo.refs.read_head() == ops.first_commit
    assert ops.repo.refs.read_branch('main') == ops.first_commit
    assert [c.message for c in ops.log().commits] == ['First commit']


def test_reset_discards_staged_changes(repo_with_commits, write_file):
    ops = repo_with_commits
    write_file('wip.txt', 'wip\n')
    ops.add('wip.txt')

    result = ops.reset('HEAD')
    assert result.discarded == 1
    assert ops.status().clean


def test_reset_unknown_commit(repo_with_commits):
    ops = repo_with_commits
    with pytest.raises(NotFound):
        ops.reset('deadbeef')
    assert ops.repo.refs.read_head() == ops.second_commit


def test_branch_listing(repo_with_commits):
    ops = repo_with_commits
    assert ops.branch('feature') == ops.second_commit
    assert [(b.name, b.is_current) for b in ops.branch()] == [('feature', False), ('main', True)]


def test_delete_branch(repo_with_commits):
    ops = repo_with_commits
    ops.branch('feature')
    ops.delete_branch('feature')
    assert [b.name for b in ops.branches()] == ['main']


def test_edit_and_show_workflow(ops, write_file):
    """Two commits of one file; show reports the changed line."""
    write_file('a.txt', 'hello')
    d1 = ops.add('a.txt').digest
    c1 = ops.commit('first').commit_hash

    first = ops.repo.get_commit(c1)
    assert first.parent is None
    assert [(e.path, e.digest) for e in first.files] == [('a.txt', d1)]

    write_file('a.txt', 'hello world')
    d2 = ops.add('a.txt').digest
    assert d2 != d1
    c2 = ops.commit('second').commit_hash
    assert ops.repo.get_commit(c2).parent == c1

    result = ops.show(c2)
    assert len(result.files) == 1
    assert result.files[0].path == 'a.txt'
    assert result.files[0].removed_lines() == ['hello']
    assert result.files[0].added_lines() == ['hello world']


def test_branch_and_merge_workflow(ops, write_file):
    """A feature branch merged back replaces main's file list."""
    write_file('a.txt', 'hello')
    ops.add('a.txt')
    c1 = ops.commit('first').commit_hash

    ops.branch('feature')

    write_file('a.txt', 'hello world')
    ops.add('a.txt')
    c2 = ops.commit('second').commit_hash

    ops.checkout('feature')
    assert ops.repo.refs.read_head() == c1
    write_file('b.txt', 'feature file')
    ops.add('b.txt')
    c3 = ops.commit('feature work').commit_hash
    assert ops.repo.get_commit(c3).parent == c1

    ops.checkout('main')
    c4 = ops.merge('feature').commit_hash

    merge_commit = ops.repo.get_commit(c4)
    assert merge_commit.parent == c2
    assert merge_commit.merge_parent == c3
    assert merge_commit.files == ops.repo.get_commit(c3).files
    assert ops.repo.refs.read_branch('main') == c4

"""Reference management tests."""

import pytest
from pushup.core.errors import NotFound, AlreadyExists, InvalidOperation
from pushup.core.refs import RepositoryState, validate_branch_name


def test_initial_state(repo):
    state = repo.refs.load_state()
    assert state == RepositoryState(branch='main', head='')
    assert not state.has_commits


def test_state_transitions():
    state = RepositoryState(branch='main', head='a' * 40)
    assert state.advance('b' * 40) == RepositoryState('main', 'b' * 40)
    assert state.switch('feature', 'c' * 40) == RepositoryState('feature', 'c' * 40)
    assert state.head == 'a' * 40


def test_current_branch_fallback(repo):
    """A missing or empty CURRENT_BRANCH reads as main."""
    repo.current_branch_file.write_text('')
    assert repo.refs.get_current_branch_name() == 'main'

    repo.current_branch_file.unlink()
    assert repo.refs.get_current_branch_name() == 'main'


def test_current_branch_strips_whitespace(repo):
    repo.current_branch_file.write_text('feature\n')
    assert repo.refs.get_current_branch_name() == 'feature'


def test_read_head_missing_file(repo):
    repo.head_file.unlink()
    assert repo.refs.read_head() == ''


def test_create_branch_at_head(repo_with_commits):
    refs = repo_with_commits.repo.refs
    tip = refs.create_branch('feature')

    assert tip == repo_with_commits.second_commit
    assert refs.read_branch('feature') == tip
    assert refs.get_current_branch_name() == 'main'


def test_create_branch_without_commits(repo):
    assert repo.refs.create_branch('feature') == ''
    assert repo.refs.read_branch('feature') == ''


def test_create_existing_branch(repo):
    with pytest.raises(AlreadyExists):
        repo.refs.create_branch('main')


@pytest.mark.parametrize('name', ['', ' ', 'a/b', '.hidden', '-x', 'two words', 'HEAD'])
def test_invalid_branch_names(name):
    with pytest.raises(InvalidOperation):
        validate_branch_name(name)


def test_read_missing_branch(repo):
    with pytest.raises(NotFound):
        repo.refs.read_branch('nope')


def test_set_branch_tip_requires_commit(repo):
    blob = repo.put(b'just a blob')
    with pytest.raises(NotFound):
        repo.refs.set_branch_tip('main', blob)


def test_list_branches(repo_with_commits):
    refs = repo_with_commits.repo.refs
    refs.create_branch('zeta')
    refs.create_branch('alpha')

    branches = refs.list_branches()
    assert [b.name for b in branches] == ['alpha', 'main', 'zeta']
    assert [b.name for b in branches if b.is_current] == ['main']
    assert all(b.tip == repo_with_commits.second_commit for b in branches)


def test_delete_branch(repo):
    repo.refs.create_branch('feature')
    repo.refs.delete_branch('feature')
    assert not repo.refs.branch_exists('feature')


def test_delete_current_branch(repo):
    repo.refs.create_branch('feature')
    repo.refs.set_current_branch_name('feature')
    with pytest.raises(InvalidOperation):
        repo.refs.delete_branch('feature')
    assert repo.refs.branch_exists('feature')


def test_delete_main_from_another_branch(repo):
    repo.refs.create_branch('feature')
    repo.refs.set_current_branch_name('feature')
    with pytest.raises(InvalidOperation):
        repo.refs.delete_branch('main')
    assert repo.refs.branch_exists('main')


def test_delete_missing_branch(repo):
    with pytest.raises(NotFound):
        repo.refs.delete_branch('ghost')


def test_store_state_same_branch(repo_with_commits):
    refs = repo_with_commits.repo.refs
    previous = refs.load_state()
    refs.store_state(previous.advance(repo_with_commits.first_commit), previous)

    assert refs.read_head() == repo_with_commits.first_commit
    assert refs.read_branch('main') == repo_with_commits.first_commit
    assert refs.get_current_branch_name() == 'main'


def test_store_state_switch_leaves_old_branch(repo_with_commits):
    refs = repo_with_commits.repo.refs
    refs.create_branch('feature')
    previous = refs.load_state()
    refs.store_state(previous.switch('feature', repo_with_commits.second_commit), previous)

    assert refs.get_current_branch_name() == 'feature'
    assert refs.read_branch('main') == repo_with_commits.second_commit


def test_store_state_writes_head_before_branch(repo_with_commits, monkeypatch):
    refs = repo_with_commits.repo.refs
    order = []
    monkeypatch.setattr(refs, 'write_head', lambda digest: order.append('HEAD'))
    monkeypatch.setattr(refs, 'set_branch_tip', lambda name, digest: order.append('branch'))
    monkeypatch.setattr(refs, 'set_current_branch_name', lambda name: order.append('CURRENT_BRANCH'))

    refs.store_state(RepositoryState('feature', repo_with_commits.first_commit))
    assert order == ['HEAD', 'branch', 'CURRENT_BRANCH']

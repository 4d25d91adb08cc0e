"""Object model tests."""

import json
import pytest
from pushup.core.objects import Blob, Commit, StagedEntry, current_timestamp
from pushup.core.hash import hash_object


def test_blob_creation():
    """Test creating a blob."""
    blob = Blob(b'hello world')
    assert blob.data == b'hello world'
    assert blob.type == 'blob'


def test_blob_hash_is_content_hash():
    """Blob digest is the SHA-1 of its raw bytes."""
    blob = Blob(b'test')
    assert blob.hash == hash_object(b'test')


def test_blob_serialize_deserialize():
    """Test blob serialization round trip."""
    original = Blob(b'test data')
    restored = Blob()
    restored.deserialize(original.serialize())

    assert restored.data == original.data
    assert restored.hash == original.hash


def test_blob_text_replaces_invalid_utf8():
    assert Blob(b'caf\xc3\xa9').text() == 'café'
    assert Blob(b'\xff').text() == '�'


def test_staged_entry_record_shape():
    entry = StagedEntry('a.txt', 'f' * 40)
    assert entry.to_dict() == {'filePath': 'a.txt', 'fileHash': 'f' * 40}
    assert StagedEntry.from_dict(entry.to_dict()) == entry


def test_current_timestamp_format():
    """Timestamps are UTC with milliseconds and a Z suffix."""
    stamp = current_timestamp()
    assert stamp.endswith('Z')
    assert len(stamp) == len('2024-01-01T00:00:00.000Z')


def test_commit_serialization_key_order():
    """Commit records are compact JSON in a fixed key order."""
    files = [StagedEntry('a.txt', 'a' * 40)]
    commit = Commit.create('Initial', files, timestamp='2024-01-01T00:00:00.000Z')

    data = commit.serialize()
    assert data == (
        b'{"timestamp":"2024-01-01T00:00:00.000Z","message":"Initial",'
        b'"files":[{"filePath":"a.txt","fileHash":"' + b'a' * 40 + b'"}],'
        b'"parent":null}'
    )


def test_commit_merge_parent_only_when_set():
    files = [StagedEntry('a.txt', 'a' * 40)]
    plain = Commit.create('Plain', files, parent='b' * 40)
    merge = Commit.create('Merge', files, parent='b' * 40, merge_parent='c' * 40)

    assert 'mergeParent' not in json.loads(plain.serialize())
    record = json.loads(merge.serialize())
    assert list(record) == ['timestamp', 'message', 'files', 'parent', 'mergeParent']
    assert record['mergeParent'] == 'c' * 40
    assert merge.is_merge
    assert not plain.is_merge


def test_commit_serialize_deserialize():
    """Test commit serialization round trip."""
    files = [StagedEntry('a.txt', 'a' * 40), StagedEntry('dir/b.txt', 'b' * 40)]
    original = Commit.create('Message with ünïcode', files, parent='d' * 40)

    restored = Commit()
    restored.deserialize(original.serialize())

    assert restored.message == original.message
    assert restored.files == files
    assert restored.parent == 'd' * 40
    assert restored.merge_parent is None
    assert restored.timestamp == original.timestamp
    assert restored.hash == original.hash


def test_commit_non_ascii_stored_verbatim():
    commit = Commit.create('héllo', [], timestamp='2024-01-01T00:00:00.000Z')
    assert 'héllo'.encode('utf-8') in commit.serialize()


def test_commit_hash_depends_on_parent():
    files = [StagedEntry('a.txt', 'a' * 40)]
    stamp = '2024-01-01T00:00:00.000Z'
    first = Commit.create('Same', files, parent='1' * 40, timestamp=stamp)
    second = Commit.create('Same', files, parent='2' * 40, timestamp=stamp)
    assert first.hash != second.hash


def test_commit_file_digest():
    commit = Commit.create('Msg', [StagedEntry('a.txt', 'a' * 40)])
    assert commit.file_digest('a.txt') == 'a' * 40
    assert commit.file_digest('missing.txt') is None


@pytest.mark.parametrize('data', [
    b'plain file content',
    b'\xff\xfe',
    b'[1, 2, 3]',
    b'{"message": "no timestamp"}',
    b'{"timestamp": "t", "message": "m", "files": [{"path": "x"}]}',
])
def test_commit_deserialize_rejects_non_commits(data):
    with pytest.raises(ValueError):
        Commit().deserialize(data)

"""Tree nodes: derived metadata, parent links and subtree release."""
import gc

from filestore.nodes import File, Folder, content_size


def build_tree():
    root = Folder.root()
    aaa = Folder.child_of(root, "aaa")
    root._add_folder("aaa", aaa)
    bbb = Folder.child_of(aaa, "bbb")
    aaa._add_folder("bbb", bbb)
    note = File(path="/aaa/bbb/note.txt", extension="txt", _content="hi")
    bbb._add_file("note.txt", note)
    readme = File(path="/aaa/readme", extension="", _content="x")
    aaa._add_file("readme", readme)
    return root, aaa, bbb, note, readme


def test_root_has_no_parent():
    root = Folder.root()
    assert root.path == "/"
    assert root.parent is None
    assert root.lookup("..") is None
    assert root.lookup(".") is root


def test_child_paths_and_parent_links():
    root, aaa, bbb, _, _ = build_tree()
    assert aaa.path == "/aaa"
    assert bbb.path == "/aaa/bbb"
    assert bbb.lookup("..") is aaa
    assert aaa.parent is root
    assert root.lookup("aaa") is aaa
    assert root.lookup("missing") is None


def test_counts_follow_mappings():
    _, aaa, _, _, _ = build_tree()
    assert aaa.folder_count == 1
    assert aaa.file_count == 1
    aaa._remove_file("readme")
    assert aaa.file_count == 0
    assert aaa.file_names() == []


def test_file_size_is_derived_from_content():
    file = File(path="/yoyo", extension="", _content="huhu")
    assert file.size == 4
    file._replace_content("huuuuuuuuuuuuuuuuuuuuu")
    assert file.size == 22
    assert content_size(b"\x00\x01") == 2
    assert content_size("é") == 2


def test_release_visits_each_descendant_once():
    root, aaa, bbb, note, readme = build_tree()
    count = root._remove_folder("aaa")
    assert (count.folders, count.files) == (2, 2)
    assert aaa.released and bbb.released
    assert note.released and readme.released
    assert note.content == ""
    # the parent is untouched
    assert not root.released
    assert root.folder_count == 0


def test_parent_link_does_not_keep_parent_alive():
    root = Folder.root()
    child = Folder.child_of(root, "aaa")
    root._add_folder("aaa", child)
    del root
    gc.collect()
    assert child.parent is None


def test_remove_folder_detaches_after_release():
    root, aaa, bbb, _, _ = build_tree()
    count = root._remove_folder("aaa")
    assert count.folders == 2
    assert not root.has_folder("aaa")
    assert bbb.lookup("..") is aaa

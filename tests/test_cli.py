import io
import struct

import pytest

from labkit.v6fs.checksum import checksum_inumber, to_hex
from labkit.v6fs.cli import (
    dump_inode_checksums,
    dump_pathname_checksums,
    main,
    print_directory,
)
from labkit.v6fs.filesystem import UnixFileSystem
from labkit.v6fs.layout import InodeMode

SECTOR = 512
NUM_SECTORS = 8
FILE_CONTENT = b"0123456789abcdef" * 37 + b"end"
SMALL_CONTENT = b"abc"
ROOT_ENTRIES = [(1, "."), (1, ".."), (2, "hello.txt"), (3, "sub")]
SUB_ENTRIES = [(3, "."), (1, ".."), (4, "a"), (0, "gone")]
DIR_MODE = InodeMode.IALLOC | InodeMode.IFDIR
FILE_MODE = InodeMode.IALLOC


def _inode(mode, size, addrs):
    addr = list(addrs) + [0] * (8 - len(addrs))
    return struct.pack("<H4BH8H2H2H", mode, 1, 0, 0, size >> 16, size & 0xFFFF,
                       *addr, 0, 0, 0, 0)


def _dir(entries):
    return b"".join(struct.pack("<H14s", n, name.encode()) for n, name in entries)


def _sector(data):
    return data.ljust(SECTOR, b"\0")


@pytest.fixture
def image(tmp_path):
    inodes = b"".join([
        _inode(DIR_MODE, 16 * len(ROOT_ENTRIES), [3]),
        _inode(FILE_MODE, len(FILE_CONTENT), [4, 5]),
        _inode(DIR_MODE, 16 * len(SUB_ENTRIES), [6]),
        _inode(FILE_MODE, len(SMALL_CONTENT), [7]),
        _inode(0, 0, []),
        _inode(FILE_MODE, 0, []),
    ])
    sectors = [
        struct.pack("<H", 0o407),
        struct.pack("<HH", 1, NUM_SECTORS),
        inodes,
        _dir(ROOT_ENTRIES),
        FILE_CONTENT[:SECTOR],
        FILE_CONTENT[SECTOR:],
        _dir(SUB_ENTRIES),
        SMALL_CONTENT,
    ]
    path = tmp_path / "disk.img"
    path.write_bytes(b"".join(_sector(s) for s in sectors))
    return path


@pytest.fixture
def fs(image):
    with UnixFileSystem.open(image) as mounted:
        yield mounted


def test_dump_inode_checksums_lists_allocated_inodes(fs):
    out, err = io.StringIO(), io.StringIO()
    dump_inode_checksums(fs, out, err)
    lines = out.getvalue().splitlines()
    assert [int(line.split()[1]) for line in lines] == [1, 2, 3, 4, 6]
    assert err.getvalue() == ""
    expected = (f"Inode 2 mode 0x{int(FILE_MODE):x} size {len(FILE_CONTENT)} "
                f"checksum {to_hex(checksum_inumber(fs, 2))}")
    assert lines[1] == expected
    assert lines[0].startswith(f"Inode 1 mode 0x{int(DIR_MODE):x} size 64 checksum ")


def test_dump_pathname_checksums_walks_tree(fs):
    out, err = io.StringIO(), io.StringIO()
    dump_pathname_checksums(fs, out, err)
    lines = out.getvalue().splitlines()
    assert [line.split()[1] for line in lines] == ["/", "/hello.txt", "/sub", "/sub/a"]
    assert lines[3] == (f"Path /sub/a 4 mode 0x{int(FILE_MODE):x} size 3 "
                        f"checksum {to_hex(checksum_inumber(fs, 4))}")
    # the empty slot in /sub is visited and cannot be read
    assert err.getvalue() == "Can't read inode 0 \n"


def test_print_directory(fs):
    out, err = io.StringIO(), io.StringIO()
    print_directory(fs, "/sub", out, err)
    assert out.getvalue().splitlines() == [
        f"Direntry /sub Name {name} Inumber {n}" for n, name in SUB_ENTRIES
    ]
    assert err.getvalue() == ""


def test_print_directory_missing(fs):
    out, err = io.StringIO(), io.StringIO()
    print_directory(fs, "/nope", out, err)
    assert out.getvalue() == ""
    assert err.getvalue() == "Can't find /nope\n"


def test_print_directory_on_file(fs):
    out, err = io.StringIO(), io.StringIO()
    print_directory(fs, "/hello.txt", out, err)
    assert err.getvalue() == "Can't read entries from /hello.txt\n"


def test_main_prints_superblock(image, capsys):
    assert main([str(image)]) == 0
    out = capsys.readouterr().out.splitlines()
    size = NUM_SECTORS * SECTOR
    assert out[0] == f"Disk {image} is {size} bytes ({size // 1024} KB)"
    assert out[1] == "Superblock s_isize 1"
    assert out[2] == f"Superblock s_fsize {NUM_SECTORS}"


def test_main_quiet_inode_dump(image, capsys):
    assert main(["-q", "-i", str(image)]) == 0
    out = capsys.readouterr().out
    assert "Disk" not in out
    assert out.splitlines()[0].startswith("Inode 1 ")


def test_main_pathname_dump_option_after_path(image, capsys):
    assert main(["-q", str(image), "-p"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0].startswith("Path / 1 ")


def test_main_usage_errors(image, capsys):
    assert main([]) == 1
    assert capsys.readouterr().err.startswith("Usage: ")
    assert main(["-x", str(image)]) == 1
    assert "Usage: " in capsys.readouterr().err


def test_main_missing_image(tmp_path, capsys):
    missing = tmp_path / "absent.img"
    assert main([str(missing)]) == 1
    assert f"Can't open diskimagePath {missing}" in capsys.readouterr().err


def test_main_bad_magic(tmp_path, capsys):
    path = tmp_path / "bad.img"
    path.write_bytes(bytes(2 * SECTOR))
    assert main([str(path)]) == 1
    err = capsys.readouterr().err
    assert "Failed to initialize unix filesystem" in err
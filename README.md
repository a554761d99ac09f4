# labkit

A small collection of systems tools:

- **`labkit.v6fs`** reads Unix Version 6 disk images. It handles the
  superblock, inodes, small and large file blocks (indirect and doubly
  indirect), directories and absolute path lookup. It can also compute SHA-1
  checksums of files.
- **`labkit.armsim`** is the memory model and interactive shell of an
  instruction-level ARM simulator. It has text, data and stack memory regions,
  and register and memory dumps.
- **`labkit.strlist`** is an ordered list of typed strings that can be
  concatenated by type. It comes with a report generator that writes a
  reproducible listing.
- **`labkit.procs`** has a ring of processes that pass an incrementing value,
  and a minimal shell that runs `|` pipelines.

It needs Python 3.10 or later and has no runtime dependencies.

## Installing

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Reading a V6 disk image

```
diskimageaccess [-q] [-i] [-p] diskimagePath
```

By default the command prints the disk size and these superblock fields:
`s_isize`, `s_fsize`, `s_nfree` and `s_ninode`.

- `-q` leaves out that summary.
- `-i` prints a checksum for every allocated inode, one line per inode:
  `Inode <n> mode 0x<mode> size <size> checksum <sha1>`.
- `-p` walks the tree from `/` and prints a checksum for every path:
  `Path <path> <n> mode 0x<mode> size <size> checksum <sha1>`.

The command exits with status 1 in either of these cases:

- the arguments are wrong;
- the image cannot be opened or mounted.

Mounting fails when the boot block does not start with the magic word `0407`.

From Python:

```python
from labkit.v6fs.filesystem import UnixFileSystem
from labkit.v6fs.checksum import checksum_pathname, to_hex

with UnixFileSystem.open("disk.img") as fs:
    inumber = fs.lookup("/bin/sh")
    inode = fs.iget(inumber)
    print(inumber, inode.size(), to_hex(checksum_pathname(fs, "/bin/sh")))
    for entry in fs.dir_entries(fs.lookup("/bin")):
        print(entry.name(), entry.inumber)
```

`UnixFileSystem` provides these methods:

- `iget` reads an inode.
- `index_lookup` maps a logical block to a disk sector.
- `get_block` returns the valid bytes of a file block.
- `find_name` finds an entry in a directory.
- `lookup` resolves an absolute path.
- `dir_entries` lists the raw entries of a directory, empty slots included.

Any of these raises `FileSystemError` when an inode, block, name or path
cannot be read or found. The on-disk structures are `SuperBlock`, `Inode`,
`DirEntry` and the `InodeMode` bits, all in `labkit.v6fs.layout`.
`labkit.v6fs.diskimg.DiskImage` reads and writes whole 512-byte sectors.

The file system layer only reads. It does not create, change or delete files
or directories.

## ARM simulator shell

```
arm-sim program.x [more.x ...]
```

A program file holds hexadecimal 32-bit words separated by whitespace. Each
file is loaded starting at `0x00400000`, and the PC is set to that address.
The prompt `ARM-SIM>` accepts these commands. Only the first letter is looked
at, apart from `rdump`:

| command              | effect                                         |
|----------------------|------------------------------------------------|
| `go`                 | run until the simulator halts                  |
| `run n`              | run for `n` instructions                       |
| `mdump low high`     | dump memory words from `low` to `high`         |
| `rdump`              | dump the instruction count, PC, registers and N/Z flags |
| `input reg_no value` | set a register (`value` in hex)                |
| `?`                  | help                                           |
| `quit`               | exit                                           |

Memory and register dumps also go to a file named `dumpsim` in the current
directory. A `Simulator` can be driven from Python through its methods:

- `handle_line` runs a single command line.
- `repl` reads commands from a stream.
- `run`, `go`, `mdump` and `rdump` can be called directly.

The package defines no instruction set. The default `process_instruction`
only fetches the word at the PC into `last_instruction`. It never changes the
state and never halts the machine, so `go` does not return. To give the
simulator behaviour, subclass `Simulator` and override `process_instruction`.
The override should update `next_state` and clear `run_bit` to halt.

## String list report

```
strlist-report [output-file]
```

This builds lists of star, constellation and mission names with
pseudo-random types from 0 to 7. The types are drawn from a C-library-style
`rand()` seeded with 0, so the output is the same on every run. The command
writes the list listings and the concatenation for each type to
`salida.caso.propio.ej1.txt`, or to the file you name.

```python
from labkit.strlist.proclist import StringProcList

items = StringProcList()
items.add_node(0, "hola")
items.add_node(1, "x")
items.add_node(0, "todos!")
items.concat(0, "hash")   # "hashholatodos!"
len(items)                # 3
```

## Process ring

```
ring <n> <c> <s>
```

This starts `n` processes joined in a ring by pipes. Process `s` receives `c`.
Each process reports the value it receives, increments it and passes it on.
When the value comes back around, process `s` prints the final result.

The command prints an error and exits with status 1 in these cases:

- `n` is not positive;
- `c` is negative;
- `s` is outside `0..n-1`.

From Python, `run_ring(n, value, start, out)` returns the final value.

## Pipeline shell

```
labkit-shell
```

This reads lines at a `Shell>` prompt and runs each one as a pipeline, such as
`ls -l | grep py | wc -l`. Arguments are split on spaces. A double quote at
the start of an argument groups words up to the closing quote. When a command
cannot be started, the shell prints `execvp: <reason>`. Typing `exit` or `q`,
or reaching end of input, leaves the shell.

The shell only runs pipelines. It has no built-in commands such as `cd`, no
`<`/`>` redirection, no background jobs and no variable expansion.
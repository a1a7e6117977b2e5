# gitchat

A Python library for the data side of a Git-based messaging tool. In that
model, chat channels live in a Git repository and messages are commits. Channel
settings are kept in a small INI-like config file.

The package reads and writes those config files and parses raw commit objects.
It also formats messages for display and has a few file-system helpers. It needs
nothing outside the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

### `gitchat.config_key`: config keys

Keys are made of components separated by periods. An unquoted component may
only hold ASCII letters, digits and `_`. Any other component is wrapped in
double quotes, and inside the quotes `\"` and `\\` are the escapes.

```python
from gitchat.config_key import (
    is_valid_config_key,
    isolate_config_key_components,
    merge_config_key_components,
)

is_valid_config_key('channel."my chan".name')            # True
isolate_config_key_components('channel."my chan".name')  # ['channel', 'my chan', 'name']
merge_config_key_components(["channel", "my chan", "name"])  # 'channel."my chan".name'
```

- `escape_component(text)` quotes a single component only when it needs quoting.
- `unescape(text)` removes backslash escapes.
- A malformed key, or an empty list of components, raises
  `InvalidConfigKeyError`, which is a `ValueError`.

### `gitchat.config_data`: the config tree

A `ConfigData` node holds its own properties, in insertion order, along with a
list of subsections. The root node has no section name.

```python
from gitchat.config_data import ConfigData

config = ConfigData()
config.insert("channel.general.name", "general")
config.find("channel.general.name")   # 'general'
config.update("channel.general.name", "lobby")
config.delete("channel.general.name")
```

- `insert` creates any sections that are missing. If the property already
  exists it raises `DuplicateConfigKeyError`.
- `update` and `delete` raise `MissingConfigKeyError` when the property does
  not exist.
- `find` returns `None` when the key is invalid or absent.
- Every operation has a `*_components` variant (`insert_components`,
  `update_components`, `delete_components`, `find_components`). Each one takes
  the key already split into unescaped components.
- `section_key()` returns a node's dotted section key. For the root it returns
  an empty string.

### `gitchat.node_visitor`: tree traversal

`walk_nodes(config)` yields every node of the tree in pre-order. It starts with
the root and visits subsections in the order they were created. If you give it
a node that is not the root, it raises `ValueError`.

### `gitchat.config_defaults`: recognised keys

The recognised keys are `channel.<name>.name`, `channel.<name>.createdby` and
`channel.<name>.description`. Each has an empty string as its default.

- `get_default_config_value(key)` returns that default, or `None` when the key
  is not recognised.
- `is_recognized_config_key(key)` tells whether a key is recognised.

### `gitchat.parse_config`: reading and writing config files

A config file looks like this:

```
top_level = value

[ channel.general ]
	name = general
	description = "Talk about anything"

[]
	another = value
```

Parsing follows these rules:

- Whitespace around section names, property names and values is ignored.
- `[]` returns to the root section.
- A quoted value is unquoted and its escapes are removed.
- Defining the same property twice is an error.

```python
from gitchat.config_data import ConfigData
from gitchat.parse_config import parse_config, write_config, is_config_invalid

config = ConfigData()
parse_config(config, "channel.config")
write_config(config, "copy.config")
is_config_invalid("copy.config", True)   # 0, -1 or 2
```

- `parse_config_stream` and `write_config_stream` work on text streams.
- A malformed file raises `ConfigSyntaxError`. A file that cannot be opened
  raises `OSError`.
- `write_config` replaces the file's contents. A file it creates is readable and
  writable by its owner only.
- `is_config_invalid(path, recognized_keys_only)` returns one of three values:
  - `-1` if the file cannot be read or parsed,
  - `2` if `recognized_keys_only` is set and the file holds an unrecognised key,
  - `0` otherwise.

### `gitchat.oid`: object ids

- `git_str_to_oid(text)` parses the first 40 hex digits of `text` into 20 bytes.
  Upper and lower case digits are both accepted.
- `git_oid_to_str(oid)` formats 20 bytes as 40 lower case hex digits.
- Bad input raises `InvalidObjectIdError`.

### `gitchat.commit`: commits and messages

- `parse_commit(commit_id, data)` parses a raw commit object, in the form that
  `git cat-file` prints, into a `GitCommit`.
  - A `GitCommit` holds `commit_id`, `tree_id`, `parents`, `author`,
    `committer` and `body`.
  - Each signature is a `GitSignature` with `name`, `email` and a `GitTime`
    `timestamp`. The timestamp holds epoch seconds and an offset in minutes.
  - A missing or malformed tree, author or committer header raises
    `CommitParseError`.
- `format_pretty_message(commit, message, message_type, no_color)` renders a
  message as a header line followed by the message lines, each indented with a
  tab.
  - The header has the form `[<local time> <PLN|DEC|ERR> <author>]`.
  - The header is coloured by `MessageType` unless `no_color` is set.
- `pretty_print_message(commit, message, message_type, no_color, output)` writes
  the same text to a stream.

### `gitchat.fs_utils`: file-system helpers

- `copy_dir` copies a directory tree, keeping file modes and symbolic links.
- `copy_file` copies a single file to a new file with a given mode.
- `copy_stream` copies one binary stream to another.
- `safe_create_dir` creates a directory unless it already exists.
- `find_in_path` and `is_executable` search `PATH` for an executable.
- `get_symlink_target` and `get_cwd` read link targets and the working
  directory.
- `set_cloexec` marks a file descriptor close-on-exec.

## What this package does not do

- It has no command-line program.
- It never runs `git`. Callers supply raw commit data themselves.
- It does not walk commit history, add files to the index or create commits.
- It does not encrypt or decrypt messages, and it does not manage keys.
- `MessageType.DECRYPTED` only labels a message that was decrypted elsewhere.
# eamcore

`eamcore` holds the data models and local storage for an Unreal Engine
content manager. It covers purchased marketplace assets, installed engines,
projects and plugins. It is a library only: it has no graphical interface
and no command. You build an application on top of it.

## Modules

### `eamcore.assetinfo`

- `AssetInfo`, `Category`, `KeyImage` and `ReleaseInfo` are dataclasses that
  describe catalogue entries.
- `parse_asset_info(data)` builds an `AssetInfo` from a decoded JSON object.
  It reads the keys `id`, `title`, `categories`, `keyImages`, `releaseInfo`,
  `creationDate`, `lastModifiedDate` and a few more. Any other keys are kept
  in `extra`. Timestamps are converted to UTC. If there is no `id`, it raises
  `ValueError`.
- `AssetInfo.latest_release()` returns the release with the latest
  `date_added`.
- `AssetInfo.thumbnail()` returns the first key image whose type is
  `Thumbnail` or `DieselGameBox`. Case does not matter.
- `AssetInfo.matches_filter(tag, search)` is true when two things hold. Some
  category path must contain `tag`. The title must contain `search`, with case
  ignored. An argument that is `None` is not checked.
- `first_non_empty(value, other)` returns `value` unless it is empty. In that
  case it returns `other`.

### `eamcore.database`

`Database(path)` opens an SQLite file. If `path` is `None` it uses
`default_database_path()`, which is `eam.db` in the user data directory. The
tables are created when the database is opened. Methods:

- `is_favorite`, `add_favorite`, `remove_favorite` work on favourite assets.
- `set_project_engine`, `project_engine` store the engine last used for a
  project.
- `set_user_data`, `user_data` store named string values.

`Database` is a context manager, and the connection closes on exit.

### `eamcore.entries`

`CategoryData(name, filter, path, leaf)` and `LogData(path, name, crash)` are
plain records.

### `eamcore.engine`

- `UnrealVersion` holds the contents of `Build.version`.
  - `format()` gives `major.minor.patch`. For an invalid version it gives the
    branch name.
  - `valid()` is false only when every numeric field is -1.
  - `compare(other)` returns -1, 0 or 1. Invalid versions sort last.
- `parse_unreal_version(text)` parses the JSON. It raises `ValueError` on a
  malformed document.
- `read_engine_version(path)` reads `Engine/Build/Build.version` under an
  engine directory. It returns `None` if the file cannot be read. It returns a
  default `UnrealVersion` if the file cannot be parsed.
- `EngineData(path, guid, version, position)` is an installed engine.
  - `update(msg)` applies an `UpdateMsg` or a `BranchMsg`. It then calls every
    callback registered with `connect`.
  - `valid()` reports whether the version is valid.

### `eamcore.plugin`

- `Uplugin`, `Module` and `Plugin` model `.uplugin` descriptors.
- `parse_uplugin`, `parse_module` and `parse_plugin` build them from JSON.
  They raise `ValueError` on a malformed document.
- `read_uplugin(path)` reads a file. An unreadable file gives a default
  `Uplugin`. A file that cannot be parsed raises `ValueError`.
- `PluginData(path, name)` is a plugin entry.

### `eamcore.project`

- `Uproject` models `.uproject` descriptors.
- `parse_uproject(text)` parses one and raises `ValueError` on malformed
  input.
- `read_uproject(path)` falls back to a default `Uproject` on any failure.
- `thumbnail_path(path)` gives `Saved/AutoScreenshot.png` next to the project
  file.
- `ProjectData(path, name)` reads the descriptor and strips the braces from
  `engine_association`.
  - `load_thumbnail()` reads the screenshot if it exists and is a PNG. It
    stores the bytes in `thumbnail`, calls the callbacks registered with
    `connect`, and returns the bytes.

### `eamcore.asset`

- `AssetType` lists the asset kinds.
- `decide_kind(asset)` picks the kind from the first category path that is
  exactly `assets`, `games`, `plugins`, `projects` or `engines`.
- `downloaded_locations(directories, asset_id)` lists the
  `<vault>/<asset_id>/data` directories that exist.
- `AssetData(asset, image, database, vault_directories)` joins an `AssetInfo`
  with two pieces of state: whether the asset is a favourite in the
  `Database`, and whether it was downloaded into any vault directory. Its
  methods:
  - `kind()`.
  - `release()` and `last_modified()`.
  - `check_favorite()` and `check_downloaded()`.
  - `refresh()`, which rechecks both states and calls the callbacks
    registered with `connect`.
  - `check_category(cat)`, which evaluates filters such as
    `"assets&!downloaded"` or `"favorites|plugins"`. Terms are joined by `&`
    and `|` and evaluated right to left. A leading `!` negates a term.
    `favorites` and `downloaded` test the asset's state. Any other term
    matches a category path that contains it, with case ignored.

### `eamcore.epic_web`

`EpicWeb(session)` wraps a cookie-keeping `requests.Session`. Its methods:

- `start_session(exchange_token)` turns an exchange code into a logged-in web
  session. Failures are logged.
- `validate_eula(account_id)` reports whether the account has accepted the
  engine licence. It returns `False` on any failure.
- `run_query(url)` fetches a URL and returns the decoded JSON. It raises on
  request or decoding errors.

`parse_eula_response(text)` parses the licence query answer into an
`EulaResponse`.

## What it does not do

- It does not log in to the store API or manage access tokens.
- It does not download assets, engines or thumbnails from the store.
- It does not check engine repositories for updates. `EngineData` only
  records what it is told through `update`.
- It has no windows and no command-line program.

## Installation

```
pip install .
```

Install the test extra to run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from eamcore.assetinfo import parse_asset_info
from eamcore.asset import AssetData
from eamcore.database import Database

info = parse_asset_info({
    "id": "example-asset",
    "title": "Example Asset",
    "categories": [{"path": "assets/environments"}],
})

with Database(":memory:") as db:
    db.add_favorite("example-asset")
    asset = AssetData(info, None, db, ["/path/to/vault"])
    print(asset.kind(), asset.favorite)             # AssetType.ASSET True
    print(asset.check_category("favorites&assets"))  # True
```
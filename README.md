# zeroplugins

Plugin logic for a group-chat bot, usable as an ordinary Python library.
Each module holds the parsing, lookup and image work of one plugin and
knows nothing of any bot framework: you pass in message text or segments,
files and, where the network is used, an optional HTTP session with `get`
or `head` methods (the `requests` module is used when none is given), and
you get back text, URLs or Pillow images.

## Installation

```
pip install .
```

Pillow and requests are installed with it. For the test suite:

```
pip install ".[test]"
pytest
```

## Modules

### `zeroplugins.emojimix`

Combines two emoji into one sticker from the emoji kitchen image set.

- `face_to_emoji(segment)` turns a message segment such as
  `{"type": "text", "data": {"text": "😄"}}` or
  `{"type": "face", "data": {"id": "14"}}` into an emoji, or `None`.
- `match_pair(segments, raw_message)` returns the two supported emoji of a
  two-segment message, or of a two-character raw message, or `None`.
- `mix_urls(template, first, second)` gives the two candidate URLs, one for
  each order; `KITCHEN_URL` is the usual template.
- `find_mix(template, first, second, session=None)` sends HEAD requests and
  returns the first URL answering 200, or `None`.

`EMOJI_DATES` and `QQ_FACES` hold the supported emoji and the face-id table.

### `zeroplugins.epidemic`

- `Area` is one area's figures with its `children`.
- `parse_area(data)` and `parse_report(payload)` build the tree from the
  JSON report (`parse_report` returns the root and the update time and
  raises `ValueError` when the report has no area tree).
- `find_city(area, name)` searches the tree depth first.
- `query_epidemic(city, url=TX_URL, session=None)` fetches and searches.
- `format_report(area, update_time)` renders the reply text.

### `zeroplugins.event`

Friend requests and group invitations.

- `AutoAccept(value)` keeps the auto-accept switches as a bit set in
  `value`; `should_accept_friend(from_superuser)` and
  `should_accept_invite(from_superuser)` decide, and
  `toggle(option, target)` applies "开启"/"关闭" to "申请", "邀请" or "主人"
  and returns the reply text.
- `encode_flag(flag)` turns the low seven bytes of a decimal request flag
  into four CJK characters; `decode_flag(text)` returns the decimal string.
- `parse_decision(text)` reads "同意申请<code> reason" style replies into a
  `Decision` (with `accept`, `kind`, `flag`, `reason` and `reply`);
  `parse_toggle(text)` reads "开启自动同意申请" style commands.
- `format_friend_notice(...)` and `format_invite_notice(...)` build the
  message nodes sent to the owner.

### `zeroplugins.github`

- `parse_command(text)` splits `>github [-p |-t ]query` into option and query.
- `build_search_url(api, query)` and
  `search_repository(api, query, session=None)` query the search API
  (`SEARCH_API`); a non-200 answer or an empty result raises `GitHubError`.
- `format_repository(repo)` renders the text description, using
  `not_null` for empty fields; `preview_image_url(PREVIEW_BASE, full_name)`
  gives the preview picture.

### `zeroplugins.fortune`

Daily fortune slips drawn on a background picture.

- `BACKGROUNDS` names the background sets; `background_setting(name)` and
  `background_kind(setting)` convert between a name and the stored integer.
- `load_omikujis(path)` reads the slips (JSON list of `title`/`content`).
- `load_background(zip_path, index)` decodes an archive entry.
- `draw(background, title, content, font_path, out)` draws the slip in
  vertical columns (`layout_text`, `rows_num`, `offset`) and writes a JPEG
  to a path or binary file, returning the byte count.
- `cache_name(zip_path, index, title, content)` gives an MD5 hex name for
  caching the result.

### `zeroplugins.genshin`

Ten-pull card draws from a zip archive of card art.

- `CardPool(zip_path)` indexes the archive; `roll(count=10,
  five_star_mode=False, rng=None)` returns a `DrawResult` whose `message`
  announces the draw, and `render(result)` composes the 1920×1080 picture.
  Every ninth ordinary draw starts with a five-star card.
- `is_five_star_mode(store)` and `set_five_star_mode(store, enabled)` read
  and set the pool mode in a stored integer.
- `character_name(path)` and `reply_text(names, kind, previous)` build the
  five-star announcement.

### `zeroplugins.gif`

Avatar meme GIFs.

- `zeroplugins.gif.canvas`: `Frame` (with `insert_up`, `insert_bottom`,
  `insert_up_centered`, `insert_bottom_centered` and `circle`),
  `load_first_frame`, `load_all_frames`, `resize`, `rotate` and `save_gif`.
  `Workspace(data_dir, user_id, material_url, fetch=None)` keeps a per-user
  folder and a shared material cache: `download`, `download_range`,
  `prepare_logos` (numbers become avatar URLs, anything else a picture id),
  `logo`, `logo2` and `frames`.
- `zeroplugins.gif.motion` and `zeroplugins.gif.extra` each offer
  `names()`, the command names they know (for example "转", "滚", "捶",
  "抬棺", "砰", "踢球"), and `render(workspace, name)`, which writes the GIF
  into the user folder and returns its `file://` URI. An unknown name
  raises `ValueError`.

## Examples

```python
from zeroplugins import emojimix

pair = emojimix.match_pair([], "😀🌹")
if pair:
    for url in emojimix.mix_urls(emojimix.KITCHEN_URL, *pair):
        print(url)
```

```python
from zeroplugins.event import decode_flag, encode_flag

code = encode_flag(1234567890123)
assert decode_flag(code) == "1234567890123"
```

```python
from zeroplugins.gif import motion
from zeroplugins.gif.canvas import Workspace

workspace = Workspace("data/gif", 10001, "https://materials.example.com/")
workspace.prepare_logos(["10001"])
print(motion.render(workspace, "转"))
```

## What it does not do

- It does not connect to a chat service, register handlers or rate-limit
  users; wiring messages to these functions is up to the caller.
- It stores no settings: the auto-accept bits, the card-pool mode and the
  fortune background are plain integers the caller must keep.
- It ships no fonts, fortune texts or card archives; paths to them are
  passed in.
- The meme set covers only the animations in `motion` and `extra`; there is
  no parser that turns a chat message into a meme command, and there is no
  command-line program.
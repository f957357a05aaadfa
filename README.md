# nvframe

nvframe is the logic behind a graphical editor front end. It works out what gets drawn and what gets sent to the editor. It has no drawing library attached.

## Modules

- `nvframe.animation`
  - Easing functions: `ease_linear`, `ease_in_quad`, `ease_out_quad`, `ease_in_out_quad`, `ease_in_cubic`, `ease_out_cubic`, `ease_in_out_cubic`, `ease_in_expo` and `ease_out_expo`.
  - Interpolation with `lerp`, `ease` and `ease_point`.
  - An immutable `Point` vector with `length`, `normalized`, `dot` and `is_zero`.
- `nvframe.dimensions`
  - `Dimensions`, a width and height in cells or pixels. It supports `*` and `/`.
  - `physical_to_grid` and `grid_to_physical` convert between pixel sizes and grid sizes.
  - `scale_position` converts a grid position to a pixel position.
- `nvframe.values`
  - Converters that turn a loosely typed setting value into a typed one: `float_from_value`, `u64_from_value`, `u32_from_value`, `i32_from_value`, `str_from_value` and `bool_from_value`.
  - If the incoming value has the wrong type, they log an error and return the current value.
- `nvframe.settings`
  - `Settings`, a registry that holds one value per settings type and copies values on the way in and out.
  - It also keeps per-property update and read handlers:
    - `read_initial_values` syncs with a mapping of `neovide_<name>` variables.
    - `changed_listener_commands` returns the editor commands that set up change notifications.
    - `handle_changed_notification` dispatches a `[name, value]` notification.
  - A shared instance is available as `SETTINGS`.
- `nvframe.config`
  - `WindowSettings`, `KeyboardSettings` and `RendererSettings`, each with its defaults.
- `nvframe.window_geometry`
  - `load_last_window_settings` reads the saved window state as `Maximized` or `Windowed`. It raises `WindowSettingsError` on failure.
  - `save_window_geometry` writes the window state as JSON.
  - `settings_path` gives the default file location.
  - `parse_window_geometry` parses `<width>x<height>` strings such as `100x50`.
- `nvframe.fonts`
  - `FontOptions.parse` parses `guifont` strings such as `Fira Code,Noto:h12:b:i`. Sizes are converted from points to pixels with `points_to_pixels`.
  - `FontSelection` and `FontKey` identify which font to load.
- `nvframe.keyboard`
  - `KeyboardManager` turns `KeyEvent`s into editor keybinding strings.
  - Key presses are queued with `queue_key_event`.
  - `flush` returns, and optionally sends, the keybindings for the frame.
  - Input in the frame in which focus changed is ignored.
- `nvframe.mouse`
  - `MouseManager` turns pointer motion, button presses and wheel movement into commands: `MouseButtonCommand`, `DragCommand` and `ScrollCommand`.
  - It has `pointer_motion`, `pointer_transition`, `line_scroll` and `pixel_scroll`.
- `nvframe.blink`
  - `BlinkStatus.update_status` advances the cursor blink cycle described by a `BlinkTiming` and returns whether the cursor is visible.
  - After the call, `scheduled_frame` holds the time of the next transition.
- `nvframe.cursor`
  - `Corner` animates one corner of the cursor.
  - `shape_corners` lays the corners out for a `CursorShape`.
  - `cursor_destination` gives the cursor's pixel position inside a window.
- `nvframe.cursor_vfx`
  - `CursorSettings` holds the cursor settings.
  - `VfxMode` selects an effect. Convert it with `vfx_mode_from_value` and `vfx_mode_to_value`.
  - The effects themselves are `PointHighlight` and `ParticleTrail`, both created by `new_cursor_vfx`.
  - `PcgRandom` is the deterministic random generator the particles use.
- `nvframe.windows`
  - `WindowAnimation` tracks the animated position and scroll of one editor grid.
  - `draw_order` sorts visible windows: root windows first, by id, then floating ones.
  - `Rect` and `WindowDrawDetails` describe drawn regions.
- `nvframe.running`
  - `RunningTracker`, with a shared instance `RUNNING_TRACKER`, records whether the application should keep running.

## Install

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from nvframe.animation import ease, ease_out_expo
from nvframe.fonts import FontOptions
from nvframe.keyboard import KeyboardManager, KeyEvent
from nvframe.window_geometry import parse_window_geometry

print(ease(ease_out_expo, 0.0, 10.0, 0.5))

options = FontOptions.parse("Fira Code:h12:b")
print(options.font_list, options.size, options.bold)

size = parse_window_geometry("120x40")
print(size.width, size.height)

keyboard = KeyboardManager(macos=False)
keyboard.set_modifiers(shift=True, ctrl=True, alt=False, logo=False)
print(keyboard.keybinding(KeyEvent(logical_key="ArrowUp")))  # <S-C-Up>
```

### Errors and fallbacks in `parse_window_geometry`

- It raises `ValueError` for input that is not `<width>x<height>` with both parts greater than zero.
- When the geometry is `None`, it falls back to the size saved in the settings file.
- If that file is missing or unreadable, or if the window was saved maximized, it falls back to 100×50.

## What it does not do

nvframe does not open a window, render text or shapes, or load font files. It does not talk to a running editor process either:

- Settings are synced against a plain mapping of variables.
- Keyboard and mouse input becomes strings and command objects, which the caller must deliver.

It provides no command-line program.
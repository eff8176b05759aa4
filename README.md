# zulucontrol

Control logic for an IDE drive emulator that serves disk images (CD-ROM,
Zip, removable and fixed disks) from a directory. It has no third-party
dependencies.

## What is in the package

- `zulucontrol.device_status`: `DriveType`, `MediaStatus`, `DriveSpeed`,
  `ZipDriveType` and the abstract `DeviceStatus`. Its kinds are
  `CDROMStatus`, `RemovableStatus`, `RigidStatus` and `ZipStatus`. Each one
  has `clone()` and a `drive_type` property. A Zip 750 reports
  `DriveType.ZIP100`.
- `zulucontrol.image`: `ImageType` and `Image`. `Image.to_json()` and
  `Image.to_json_field(name)` render an image as JSON. Every field value is
  a string. Two separately built images never compare equal.
- `zulucontrol.image_iterator`: `ImageIterator(root)` walks the valid image
  files in a directory in case-insensitive alphabetical order. Call
  `reset()` first. Then use `move_next()`, `move_previous()`,
  `move_first()`, `move_last()`, `move_to_file(name)` and `get()`. The
  properties `is_first`, `is_last`, `is_empty` and `file_count` report its
  position and contents. It also works as a context manager, which calls
  `cleanup()` on exit.

  `is_valid_filename(name)` rejects these names:
  - names that do not start with an ASCII letter or digit
  - names that start with `zulu`
  - the FPGA bitstream file
  - text and document extensions such as `.txt` and `.cue`
  - archive extensions such as `.zip` and `.7z`

  `load_image_by_filename(name, iterator)` searches forward for an image
  with that exact name. It returns the image, or `None` if there is no
  match.
- `zulucontrol.system_status`: `SystemStatus` is a dataclass that holds the
  device status, firmware version, loaded image, primary flag and card
  presence. It has `copy()`, `has_loaded_image`,
  `loaded_images_are_equal(other)`, `device_type` and `to_json()`.
- `zulucontrol.status_controller`: `StatusController` owns the current
  `SystemStatus` and passes a copy to each observer after every change.
  - Observers are either callbacks, added with `add_observer`, or queues,
    added with `add_queue_observer`. A full queue misses the update.
  - `begin_update()` and `end_update()` hold notifications back while
    several changes are made.
  - Through the `DeviceControl` interface, `load_image_safe` and
    `eject_image_safe` queue a request. At most five requests can wait.
    When the queue is full, the request is dropped and the call returns
    `False`.
  - `process_updates()` carries out one queued request.
- `zulucontrol.states`: the screen states `StatusState`, `MenuState`,
  `EjectState`, `SelectState`, `NewImageState` and `InfoState`. The module
  also has `Mode`, `MenuEntry`, `EjectEntry` and `DisplayState`.
  `make_display_state(state)` builds a `DisplayState` in the mode that the
  given screen state belongs to.
- `zulucontrol.controllers`: one controller per screen:
  `StatusModeController`, `MenuController`, `EjectController`,
  `SelectController`, `NewController` and `InfoController`.
- `zulucontrol.display_controller`: `DisplayController(device_control,
  image_root)` owns the current `DisplayState` and the screen controllers.
  `set_mode(mode)` switches screens. `add_observer(callback)` registers a
  callback that receives a copy of the display state after every change.
- `zulucontrol.control_interface`: the abstract `InputReceiver` and
  `InputInterface`, and `ControlInterface`. `ControlInterface` turns
  rotary-encoder turns and button presses into actions of the current
  screen's controller.
- `zulucontrol.i2c_server`: `I2CServer(image_root)` talks to a network
  client over any object that implements the abstract `Wire`.
  - Connect it with `attach(wire, device_control)`.
  - `check_for_device()` probes for the client.
  - `handle_update(status)` sends the status JSON to a subscribed client.
  - `poll()` reads and carries out one command from `ClientCommand`.
  - `set_ssid` and `set_password` set the network credentials handed to the
    client.
  - `write_length_prefixed_string(wire, register, data)` writes a 16-bit
    big-endian length, then the payload in 8-byte chunks.

## Installation

```
pip install .
```

For the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from zulucontrol.status_controller import StatusController
from zulucontrol.display_controller import DisplayController
from zulucontrol.control_interface import ControlInterface

status = StatusController()
display = DisplayController(status, "/path/to/images")

ui = ControlInterface()
ui.set_display_controller(display)
ui.set_status_controller(status)

display.add_observer(lambda state: print(state.current_mode))

ui.rotary_button_pressed()   # status screen -> menu ("select" highlighted)
ui.rotary_button_pressed()   # menu -> image selection, first image shown
ui.rotary_update(1)          # next image
ui.rotary_button_pressed()   # queue a load request, back to status

status.process_updates()     # carry out the queued request
print(status.status.to_json())
```

## What the package does not do

- It drives no hardware. `Wire` and `InputInterface` are abstract, so an
  I2C bus and an input device must be supplied by the caller.
- Nothing draws the screens. Display observers receive `DisplayState`
  objects and must render them themselves.
- The new-image screen creates no image. `NewController.create_and_select()`
  only returns to the status screen.
- The package has no command-line program, and it does not read or write
  any configuration file.
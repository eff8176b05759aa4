import pytest

from zulucontrol.image import Image
from zulucontrol.states import (
    DisplayState,
    EjectEntry,
    EjectState,
    InfoState,
    MenuEntry,
    MenuState,
    Mode,
    NewImageState,
    SelectState,
    StatusState,
    make_display_state,
)


def test_eject_state_toggles():
    state = EjectState()
    assert state.current_entry is EjectEntry.EJECT
    state.move_to_next_entry()
    assert state.current_entry is EjectEntry.BACK
    state.move_to_next_entry()
    assert state.current_entry is EjectEntry.EJECT


@pytest.mark.parametrize(
    "start, expected",
    [
        (MenuEntry.EJECT, MenuEntry.BACK),
        (MenuEntry.SELECT, MenuEntry.EJECT),
        (MenuEntry.INFO, MenuEntry.SELECT),
        (MenuEntry.BACK, MenuEntry.INFO),
        (MenuEntry.NEW, MenuEntry.NEW),
    ],
)
def test_menu_next(start, expected):
    state = MenuState(start)
    state.move_to_next_entry()
    assert state.current_entry is expected


@pytest.mark.parametrize(
    "start, expected",
    [
        (MenuEntry.EJECT, MenuEntry.SELECT),
        (MenuEntry.SELECT, MenuEntry.INFO),
        (MenuEntry.INFO, MenuEntry.BACK),
        (MenuEntry.BACK, MenuEntry.EJECT),
        (MenuEntry.NEW, MenuEntry.NEW),
    ],
)
def test_menu_previous(start, expected):
    state = MenuState(start)
    state.move_to_previous_entry()
    assert state.current_entry is expected


@pytest.mark.parametrize("entry", [MenuEntry.EJECT, MenuEntry.SELECT, MenuEntry.INFO, MenuEntry.BACK])
def test_menu_next_then_previous_round_trip(entry):
    state = MenuState(entry)
    state.move_to_next_entry()
    state.move_to_previous_entry()
    assert state.current_entry is entry


def test_menu_default_entry_is_eject():
    assert MenuState().current_entry is MenuEntry.EJECT


def test_new_image_state_increment_decrement():
    state = NewImageState(5)
    assert state.increment() is state
    assert state.image_index == 6
    state.decrement().decrement()
    assert state.image_index == 4


def test_status_state_offsets():
    state = StatusState(2)
    state.increment_image_name_offset()
    assert state.image_name_offset == 3
    state.reset_image_name_offset()
    assert state.image_name_offset == 0
    state.decrement_image_name_offset()
    assert state.image_name_offset == 0


def test_info_state_default():
    assert InfoState().firmware_offset == 0


def test_select_state_copy_duplicates_image():
    image = Image("disk.iso", 1024)
    state = SelectState(3, image, False)
    assert state.has_current_image
    copied = state.copy()
    assert copied.current_image is not image
    assert copied.current_image.filename == "disk.iso"
    assert copied.current_image.size_bytes == 1024
    assert copied.image_name_offset == 3
    copied.image_name_offset = 7
    assert state.image_name_offset == 3


def test_select_state_without_image():
    state = SelectState()
    assert not state.has_current_image
    assert state.copy().current_image is None


def test_default_display_state_is_eject_mode():
    assert DisplayState().current_mode is Mode.EJECT


@pytest.mark.parametrize(
    "state, mode, attribute",
    [
        (StatusState(4), Mode.STATUS, "status_state"),
        (MenuState(MenuEntry.INFO), Mode.MENU, "menu_state"),
        (SelectState(2), Mode.SELECT, "select_state"),
        (NewImageState(1), Mode.NEW_IMAGE, "new_image_state"),
        (EjectState(EjectEntry.BACK), Mode.EJECT, "eject_state"),
        (InfoState(9), Mode.INFO, "info_state"),
    ],
)
def test_make_display_state(state, mode, attribute):
    display = make_display_state(state)
    assert display.current_mode is mode
    held = getattr(display, attribute)
    assert held == state
    assert held is not state


def test_make_display_state_rejects_other_types():
    with pytest.raises(TypeError):
        make_display_state("status")


def test_display_state_copy_is_deep():
    display = make_display_state(SelectState(1, Image("a.img", 10)))
    copied = display.copy()
    assert copied.current_mode is Mode.SELECT
    assert copied.select_state.current_image is not display.select_state.current_image
    copied.status_state.increment_image_name_offset()
    copied.menu_state.move_to_next_entry()
    assert display.status_state.image_name_offset == 0
    assert display.menu_state.current_entry is MenuEntry.EJECT
import pytest

from galleria.errors import ContractViolation
from galleria.lightbox import LightboxController
from galleria.models import LightboxState
from galleria.viewport import (
    ARROW_LEFT,
    ARROW_RIGHT,
    ESCAPE,
    OVERFLOW_AUTO,
    OVERFLOW_HIDDEN,
    ScrollLockManager,
)


@pytest.fixture
def lightbox(viewport):
    return LightboxController(viewport)


def images(count):
    return tuple(f"{i}.jpg" for i in range(count))


def test_initial_state_is_closed(lightbox, viewport):
    assert lightbox.state == LightboxState(False, None, 0)
    assert lightbox.current_image_url is None
    assert viewport.listener_count == 0
    assert viewport.body_overflow == OVERFLOW_AUTO


def test_open_shows_first_image_and_acquires_resources(lightbox, viewport, make_item):
    item = make_item(1, images=images(3))

    lightbox.open(item)

    assert lightbox.state == LightboxState(True, item, 0)
    assert lightbox.current_image_url == "0.jpg"
    assert viewport.listener_count == 1
    assert viewport.body_overflow == OVERFLOW_HIDDEN


@pytest.mark.parametrize("count", [1, 2, 3, 7])
def test_next_cycles_back_to_start(lightbox, make_item, count):
    lightbox.open(make_item(1, images=images(count)))
    lightbox.jump_to(count // 2)
    start = lightbox.active_index

    for _ in range(count):
        lightbox.next()

    assert lightbox.active_index == start


@pytest.mark.parametrize("count", [1, 2, 5])
def test_prev_from_first_wraps_to_last(lightbox, make_item, count):
    lightbox.open(make_item(1, images=images(count)))

    lightbox.prev()

    assert lightbox.active_index == count - 1


def test_next_from_last_wraps_to_first(lightbox, make_item):
    lightbox.open(make_item(1, images=images(3)))
    lightbox.jump_to(2)

    lightbox.next()

    assert lightbox.active_index == 0


def test_jump_to_out_of_range_is_contract_violation(lightbox, make_item):
    lightbox.open(make_item(1, images=images(2)))

    with pytest.raises(ContractViolation):
        lightbox.jump_to(2)
    with pytest.raises(ContractViolation):
        lightbox.jump_to(-1)
    assert lightbox.active_index == 0


@pytest.mark.parametrize("action", ["next", "prev", "close"])
def test_only_open_is_valid_from_closed(lightbox, action):
    with pytest.raises(ContractViolation):
        getattr(lightbox, action)()


def test_open_item_without_images_is_contract_violation(lightbox, make_item, viewport):
    with pytest.raises(ContractViolation):
        lightbox.open(make_item(1, images=()))
    assert viewport.body_overflow == OVERFLOW_AUTO


def test_close_resets_and_releases(lightbox, viewport, make_item):
    lightbox.open(make_item(1, images=images(3)))
    lightbox.next()

    lightbox.close()

    assert lightbox.state == LightboxState(False, None, 0)
    assert viewport.listener_count == 0
    assert viewport.body_overflow == OVERFLOW_AUTO


def test_open_while_open_switches_item_without_relocking(lightbox, viewport, make_item):
    first, second = make_item(1, images=images(3)), make_item(2, images=images(2))
    lightbox.open(first)
    lightbox.next()

    lightbox.open(second)

    assert lightbox.state == LightboxState(True, second, 0)
    assert viewport.listener_count == 1
    lightbox.close()
    assert viewport.body_overflow == OVERFLOW_AUTO


def test_arrow_keys_navigate(lightbox, viewport, make_item):
    lightbox.open(make_item(1, images=images(3)))

    viewport.key_down(ARROW_RIGHT)
    viewport.key_down(ARROW_RIGHT)
    viewport.key_down(ARROW_LEFT)

    assert lightbox.active_index == 1


def test_other_keys_are_ignored(lightbox, viewport, make_item):
    lightbox.open(make_item(1, images=images(3)))

    for key in ("Enter", "ArrowUp", "a", " "):
        viewport.key_down(key)

    assert lightbox.state.is_open
    assert lightbox.active_index == 0


@pytest.mark.parametrize("index", [0, 1, 4])
def test_escape_closes_from_any_index(lightbox, viewport, make_item, index):
    lightbox.open(make_item(1, images=images(5)))
    lightbox.jump_to(index)

    viewport.key_down(ESCAPE)

    assert lightbox.is_open is False
    assert lightbox.scroll_lock.locked is False
    assert viewport.body_overflow == OVERFLOW_AUTO
    assert viewport.listener_count == 0


def test_keys_do_nothing_once_closed(lightbox, viewport, make_item):
    lightbox.open(make_item(1, images=images(3)))
    viewport.key_down(ESCAPE)

    viewport.key_down(ARROW_RIGHT)
    viewport.key_down(ESCAPE)

    assert lightbox.state == LightboxState(False, None, 0)


def test_listener_is_rebound_on_each_transition(lightbox, viewport, make_item):
    lightbox.open(make_item(1, images=images(3)))
    first = viewport._listeners[0]

    viewport.key_down(ARROW_RIGHT)

    assert viewport.listener_count == 1
    assert viewport._listeners[0] is not first


def test_keys_follow_the_current_item(lightbox, viewport, make_item):
    lightbox.open(make_item(1, images=images(2)))
    lightbox.open(make_item(2, images=images(4)))

    viewport.key_down(ARROW_LEFT)

    assert lightbox.active_index == 3


def test_teardown_releases_an_open_viewer(lightbox, viewport, make_item):
    lightbox.open(make_item(1, images=images(2)))

    lightbox.teardown()
    lightbox.teardown()

    assert lightbox.is_open is False
    assert viewport.listener_count == 0
    assert viewport.body_overflow == OVERFLOW_AUTO


def test_viewing_closes_on_error(lightbox, viewport, make_item):
    with pytest.raises(RuntimeError):
        with lightbox.viewing(make_item(1, images=images(2))):
            lightbox.next()
            raise RuntimeError("boom")

    assert lightbox.is_open is False
    assert viewport.body_overflow == OVERFLOW_AUTO
    assert viewport.listener_count == 0


def test_viewing_tolerates_close_inside_block(lightbox, viewport, make_item):
    with lightbox.viewing(make_item(1, images=images(2))):
        viewport.key_down(ESCAPE)

    assert lightbox.is_open is False


def test_scroll_lock_must_be_paired(viewport):
    lock = ScrollLockManager(viewport)

    with pytest.raises(ContractViolation):
        lock.unlock()
    lock.lock()
    with pytest.raises(ContractViolation):
        lock.lock()
    lock.unlock()
    assert viewport.body_overflow == OVERFLOW_AUTO

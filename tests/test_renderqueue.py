from fdfkit.images import Image
from fdfkit.renderqueue import DrawCall, RenderQueue


def _call(image, x, z):
    return DrawCall(image, image.add_instance(x, 0, z))


def test_draw_call_instance():
    img = Image(1, 1)
    call = _call(img, 7, 2)
    assert call.instance() is img.instances[call.instance_id]
    assert call.instance().x == 7


def test_push_front_order():
    img = Image(1, 1)
    queue = RenderQueue()
    a, b, c = _call(img, 0, 0), _call(img, 1, 1), _call(img, 2, 2)
    for call in (a, b, c):
        queue.push_front(call)
    assert list(queue) == [c, b, a]
    assert len(queue) == 3


def test_sort_by_depth():
    img = Image(1, 1)
    queue = RenderQueue()
    calls = [_call(img, i, z) for i, z in enumerate([5, 1, 3, 0])]
    for call in calls:
        queue.push_front(call)
    queue.sort()
    depths = [call.instance().z for call in queue]
    assert depths == sorted(depths)
    assert len(queue) == 4


def test_sort_reverses_equal_depths():
    img = Image(1, 1)
    queue = RenderQueue()
    a, b, c = _call(img, 0, 1), _call(img, 1, 1), _call(img, 2, 1)
    for call in (c, b, a):
        queue.push_front(call)
    assert list(queue) == [a, b, c]
    queue.sort()
    assert list(queue) == [c, b, a]


def test_sort_empty():
    queue = RenderQueue()
    queue.sort()
    assert list(queue) == []


def test_remove_image_removes_all_its_calls():
    first, second = Image(1, 1), Image(2, 2)
    queue = RenderQueue()
    a1, b1, a2 = _call(first, 0, 0), _call(second, 0, 1), _call(first, 1, 2)
    for call in (a1, b1, a2):
        queue.push_front(call)
    removed = queue.remove_image(first)
    assert set(map(id, removed)) == {id(a1), id(a2)}
    assert list(queue) == [b1]


def test_remove_missing_image():
    img = Image(1, 1)
    queue = RenderQueue()
    queue.push_front(_call(img, 0, 0))
    assert queue.remove_image(Image(1, 1)) == []
    assert len(queue) == 1
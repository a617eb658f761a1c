import cv2

from modules.input_capture import DragPhase, InputCapture


def test_press_counts_as_drag_start(session):
    capture = InputCapture(session)
    capture.on_mouse(cv2.EVENT_LBUTTONDOWN, 30, 40, cv2.EVENT_FLAG_LBUTTON)
    assert capture.dragging
    (point,) = session.store.snapshot()
    assert point.location == (30.0, 40.0)


def test_every_move_sample_appends_one_point(clock, session):
    capture = InputCapture(session)
    capture.on_mouse(cv2.EVENT_LBUTTONDOWN, 0, 0, cv2.EVENT_FLAG_LBUTTON)
    for x in range(1, 51):
        clock.advance(0.0001)
        capture.on_mouse(cv2.EVENT_MOUSEMOVE, x, x, cv2.EVENT_FLAG_LBUTTON)
    capture.on_mouse(cv2.EVENT_LBUTTONUP, 50, 50, 0)

    points = session.store.snapshot()
    assert len(points) == 51
    assert points[-1].location == (50.0, 50.0)
    assert points[0].timestamp < points[-1].timestamp
    assert not capture.dragging


def test_hover_without_press_adds_nothing(session):
    capture = InputCapture(session)
    capture.on_mouse(cv2.EVENT_MOUSEMOVE, 5, 5, 0)
    capture.on_mouse(cv2.EVENT_LBUTTONUP, 5, 5, 0)
    assert len(session.store) == 0


def test_end_phase_adds_no_point(session):
    capture = InputCapture(session)
    capture.handle((1, 1), DragPhase.BEGAN)
    capture.handle((2, 2), DragPhase.MOVED)
    capture.handle((3, 3), DragPhase.ENDED)
    assert [p.location for p in session.store] == [(1.0, 1.0), (2.0, 2.0)]


def test_intercepted_press_is_not_a_scratch(session):
    capture = InputCapture(session, intercept=lambda event, x, y, flags: x > 100)
    capture.on_mouse(cv2.EVENT_LBUTTONDOWN, 150, 10, cv2.EVENT_FLAG_LBUTTON)
    capture.on_mouse(cv2.EVENT_MOUSEMOVE, 90, 10, cv2.EVENT_FLAG_LBUTTON)
    assert len(session.store) == 0
    assert not capture.dragging


def test_drag_keeps_scratching_over_intercept_area(session):
    capture = InputCapture(session, intercept=lambda event, x, y, flags: x > 100)
    capture.on_mouse(cv2.EVENT_LBUTTONDOWN, 50, 10, cv2.EVENT_FLAG_LBUTTON)
    capture.on_mouse(cv2.EVENT_MOUSEMOVE, 150, 10, cv2.EVENT_FLAG_LBUTTON)
    assert len(session.store) == 2


def test_closed_session_ignores_input(session):
    capture = InputCapture(session)
    session.close()
    capture.handle((1, 1), DragPhase.BEGAN)
    assert len(session.store) == 0


def test_move_without_button_ends_drag(session):
    capture = InputCapture(session)
    capture.on_mouse(cv2.EVENT_LBUTTONDOWN, 10, 10, cv2.EVENT_FLAG_LBUTTON)
    capture.on_mouse(cv2.EVENT_MOUSEMOVE, 20, 20, 0)
    capture.on_mouse(cv2.EVENT_MOUSEMOVE, 30, 30, 0)
    assert len(session.store) == 1
    assert not capture.dragging

    capture.on_mouse(cv2.EVENT_LBUTTONDOWN, 40, 40, cv2.EVENT_FLAG_LBUTTON)
    capture.on_mouse(cv2.EVENT_MOUSEMOVE, 41, 41, cv2.EVENT_FLAG_LBUTTON)
    assert len(session.store) == 3

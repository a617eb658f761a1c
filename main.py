import logging

import cv2
import numpy as np
cv2.setUseOptimized(True)

import config
from core.scratch_session import ScratchSession
from modules.control_bar import ControlBar
from modules.input_capture import InputCapture
from modules.reveal_mask import RevealMaskRenderer
from modules.scratch_layers import create_cover_layer, load_background

logger = logging.getLogger("scratch_off")

HELP_TEXT = [
    "=== ScratchOff Controls ===",
    "Mouse:",
    "  Drag: Scratch to reveal",
    "  Top-right buttons: Reset / Fading on-off",
    "Keyboard:",
    "  d: Toggle fading",
    "  r: Reset (fading must be off)",
    "  c: Clear instantly",
    "  w: Fullscreen  h: Help  q/Esc: Quit",
]


def render_help(frame: np.ndarray) -> None:
    overlay = frame.copy()
    y_offset = 100
    for i, text in enumerate(HELP_TEXT):
        cv2.putText(overlay, text, (50, y_offset + i * 25),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.5, (255, 255, 255), 1, lineType=cv2.LINE_AA)
    # 半透明
    cv2.addWeighted(overlay, 0.8, frame, 0.2, 0, frame)


def window_closed(name: str) -> bool:
    try:
        return cv2.getWindowProperty(name, cv2.WND_PROP_VISIBLE) < 1
    except cv2.error:
        return True


def main() -> None:
    logging.basicConfig(
        level=getattr(config, "LOG_LEVEL", "INFO"),
        format=getattr(config, "LOG_FORMAT", "%(levelname)s %(name)s: %(message)s"),
    )

    size = (config.WINDOW_WIDTH, config.WINDOW_HEIGHT)
    background = load_background(getattr(config, "BACKGROUND_IMAGE", None), size)
    cover = create_cover_layer(
        size,
        getattr(config, "COVER_COLOR_START", (0, 0, 0)),
        getattr(config, "COVER_COLOR_END", (26, 26, 26)),
    )

    session = ScratchSession.from_config(config)
    renderer = RevealMaskRenderer(base_radius=config.REVEAL_RADIUS)
    control_bar = ControlBar(
        config.WINDOW_WIDTH,
        session,
        button_size=getattr(config, "BUTTON_SIZE", 32),
        spacing=getattr(config, "BUTTON_SPACING", 8),
        padding_x=getattr(config, "CONTROL_BAR_PADDING_X", 32),
        padding_y=getattr(config, "CONTROL_BAR_PADDING_Y", 64),
        color=getattr(config, "BUTTON_COLOR", (255, 255, 255)),
        disabled_opacity=getattr(config, "DISABLED_OPACITY", 0.3),
    )
    capture = InputCapture(session, intercept=control_bar.handle_mouse)

    cv2.namedWindow(config.WINDOW_NAME, cv2.WINDOW_NORMAL | cv2.WINDOW_KEEPRATIO)
    cv2.resizeWindow(config.WINDOW_NAME, config.WINDOW_WIDTH, config.WINDOW_HEIGHT)
    cv2.setMouseCallback(config.WINDOW_NAME, capture.on_mouse)
    fullscreen = False
    show_help = False

    session.activate()
    logger.info("surface ready (%dx%d), fading %s", size[0], size[1],
                "on" if session.decay_active else "off")

    try:
        while True:
            session.pump()

            mask = renderer.render_store(session.store, size)
            frame = renderer.composite(cover, background, mask)
            control_bar.render(frame)
            if show_help:
                render_help(frame)

            cv2.imshow(config.WINDOW_NAME, frame)
            # 鼠标回调在 waitKey 内分发，与定时器处于同一线程
            key = cv2.waitKey(1) & 0xFF

            if key in (ord("q"), 27) or window_closed(config.WINDOW_NAME):
                break
            if key == ord("d"):
                active = session.toggle_decay()
                print(f"Fading: {'ON' if active else 'OFF'}")
            if key == ord("r"):
                if session.request_reset():
                    print("Reset")
                elif session.decay_active:
                    print("Turn fading off (d) before resetting")
            if key == ord("c"):
                session.clear_now()
                print("Cleared")
            if key == ord("h"):
                show_help = not show_help
            if key == ord("w"):
                fullscreen = not fullscreen
                if fullscreen:
                    cv2.setWindowProperty(config.WINDOW_NAME, cv2.WND_PROP_FULLSCREEN, cv2.WINDOW_FULLSCREEN)
                else:
                    cv2.setWindowProperty(config.WINDOW_NAME, cv2.WND_PROP_FULLSCREEN, cv2.WINDOW_NORMAL)
                print(f"Fullscreen: {'ON' if fullscreen else 'OFF'}")
    finally:
        session.close()
        cv2.destroyAllWindows()


if __name__ == "__main__":
    main()

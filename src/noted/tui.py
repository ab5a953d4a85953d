"""Full-screen terminal shell hosting a ListController."""

import asyncio
import logging

from prompt_toolkit import Application
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.keys import Keys
from prompt_toolkit.layout import Layout, Window
from prompt_toolkit.layout.controls import FormattedTextControl

from .controller import ClearStatusLater, KeyPress, ListController, Quit, StatusExpired, WindowResized

logger = logging.getLogger(__name__)

KEY_NAMES = {
    Keys.ControlM: "enter",
    Keys.ControlJ: "enter",
    Keys.ControlI: "tab",
    Keys.BackTab: "shift+tab",
    Keys.Escape: "esc",
    Keys.ControlH: "backspace",
    Keys.Delete: "delete",
    Keys.Up: "up",
    Keys.Down: "down",
    Keys.Left: "left",
    Keys.Right: "right",
    Keys.Home: "home",
    Keys.End: "end",
    Keys.PageUp: "pageup",
    Keys.PageDown: "pagedown",
    Keys.ControlC: "ctrl+c",
}


def translate_key(key: str, data: str = "") -> str:
    """Map a prompt_toolkit key press to the controller's key names."""
    name = KEY_NAMES.get(key)
    if name:
        return name
    if len(data) == 1 and data.isprintable():
        return data
    return str(key.value if isinstance(key, Keys) else key)


def run_list(controller: ListController) -> None:
    """Run the interactive list until the controller asks to quit."""
    app: Application | None = None
    last_size: tuple[int, int] | None = None

    def run_effects(effects: list) -> None:
        for effect in effects:
            if isinstance(effect, Quit):
                app.exit()
            elif isinstance(effect, ClearStatusLater):
                loop = asyncio.get_running_loop()
                loop.call_later(effect.delay, expire_status, effect.generation)

    def expire_status(generation: int) -> None:
        controller.update(StatusExpired(generation))
        app.invalidate()

    def dispatch(event) -> None:
        run_effects(controller.update(event))

    def on_render(application: Application) -> None:
        nonlocal last_size
        size = application.output.get_size()
        current = (size.columns, size.rows)
        if current != last_size:
            last_size = current
            controller.update(WindowResized(size.columns, size.rows))

    kb = KeyBindings()

    @kb.add("escape", eager=True)
    def _(event):
        dispatch(KeyPress("esc"))

    @kb.add(Keys.Any)
    def _(event):
        for key_press in event.key_sequence:
            dispatch(KeyPress(translate_key(key_press.key, key_press.data)))

    control = FormattedTextControl(text=lambda: controller.view(), focusable=True)
    app = Application(
        layout=Layout(Window(content=control, wrap_lines=False)),
        key_bindings=kb,
        full_screen=True,
        before_render=on_render,
    )
    run_effects(controller.init())
    logger.debug(f"Starting interactive list '{controller.title}' with {len(controller.items)} item(s)")
    app.run()

#
# KDBX Browser
# Terminal browser for KeePass databases
#
from typing import List, Optional

from prompt_toolkit.application import Application
from prompt_toolkit.formatted_text import StyleAndTextTuples
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.layout import Layout, Window
from prompt_toolkit.layout.controls import FormattedTextControl
from prompt_toolkit.styles import Style

PAGE_SIZE = 15

SELECT_STYLE = Style.from_dict({
    'question-mark': 'fg:ansigreen bold',
    'message': 'bold',
    'hint': 'fg:ansibrightblack',
    'pointer': 'fg:ansicyan bold',
    'selected': 'fg:ansicyan',
    'empty': 'fg:ansibrightblack italic',
})


class SelectState:
    def __init__(self, items, default=0):   # type: (List[str], int) -> None
        self.items = items
        self.index = max(0, min(default, len(items) - 1)) if items else 0

    def move(self, offset):     # type: (int) -> None
        if self.items:
            self.index = (self.index + offset) % len(self.items)

    def jump(self, index):  # type: (int) -> None
        if self.items:
            self.index = max(0, min(index, len(self.items) - 1))

    def page(self):     # type: () -> range
        start = 0
        if len(self.items) > PAGE_SIZE:
            start = min(max(0, self.index - PAGE_SIZE // 2), len(self.items) - PAGE_SIZE)
        return range(start, min(start + PAGE_SIZE, len(self.items)))


def select_fragments(message, hint, state):     # type: (str, Optional[str], SelectState) -> StyleAndTextTuples
    fragments = [('class:question-mark', '? '), ('class:message', message)]   # type: StyleAndTextTuples
    if hint:
        fragments.append(('', ' '))
        fragments.append(('class:hint', hint))
    fragments.append(('', '\n'))
    if not state.items:
        fragments.append(('class:empty', '  (empty)\n'))
    for index in state.page():
        if index == state.index:
            fragments.append(('class:pointer', '❯ '))
            fragments.append(('class:selected', state.items[index]))
        else:
            fragments.append(('', '  ' + state.items[index]))
        fragments.append(('', '\n'))
    return fragments


def create_select_application(message, items, default=0, hint=None):
    # type: (str, List[str], int, Optional[str]) -> Application
    state = SelectState(items, default)
    kb = KeyBindings()

    @kb.add('up')
    @kb.add('k')
    def _up(event):
        state.move(-1)

    @kb.add('down')
    @kb.add('j')
    def _down(event):
        state.move(1)

    @kb.add('pageup')
    def _page_up(event):
        state.jump(state.index - PAGE_SIZE)

    @kb.add('pagedown')
    def _page_down(event):
        state.jump(state.index + PAGE_SIZE)

    @kb.add('home')
    def _home(event):
        state.jump(0)

    @kb.add('end')
    def _end(event):
        state.jump(len(state.items) - 1)

    @kb.add('enter')
    def _select(event):
        if state.items:
            event.app.exit(result=state.index)

    @kb.add('escape', eager=True)
    @kb.add('q')
    def _cancel(event):
        event.app.exit(result=None)

    @kb.add('c-c')
    def _interrupt(event):
        event.app.exit(exception=KeyboardInterrupt, style='class:aborting')

    control = FormattedTextControl(lambda: select_fragments(message, hint, state), show_cursor=False)
    app = Application(layout=Layout(Window(content=control, always_hide_cursor=True)),
                      key_bindings=kb, style=SELECT_STYLE, erase_when_done=True)
    app.ttimeoutlen = 0.05
    return app


def select(message, items, default=0, hint=None):
    # type: (str, List[str], int, Optional[str]) -> Optional[int]
    """Let the user pick one of the items.

    Returns the index of the chosen item or None when the prompt was dismissed
    with Escape.  The prompt is erased from the terminal when it completes.
    """
    return create_select_application(message, items, default=default, hint=hint).run()

"""Start menu: address and name fields and a play button."""

from __future__ import annotations

from dataclasses import dataclass

import pygame

from rtype.settings import SCREEN_HEIGHT, SCREEN_WIDTH, GameState

TITLE_FONT = "ressources/fonts/stocky.ttf"
LABEL_FONT = "ressources/fonts/arial.ttf"
BACKGROUND_PATH = "./ressources/bgt.png"
MENU_SOUND = "./ressources/sounds/meunu.ogg"

_OUTLINE = 2
_WHITE = (255, 255, 255)
_BLACK = (0, 0, 0)
_RED = (255, 0, 0)


@dataclass(frozen=True)
class MenuResult:
    """What the menu ended with: the next state and the text typed in."""

    state: GameState
    ip_port: str = ""
    pseudo: str = ""


class MenuForm:
    """Text fields and play button of the menu, without any drawing."""

    IP_PLACEHOLDER = "Ip + port"
    NAME_PLACEHOLDER = "Name"

    def __init__(self, width: int = SCREEN_WIDTH, height: int = SCREEN_HEIGHT) -> None:
        self.ip_box = pygame.Rect(50, int(width / 2 - 100), 300, 30)
        self.name_box = pygame.Rect(50, int(width / 2 - 50), 300, 30)
        outer_width = 150 + 2 * _OUTLINE
        outer_height = 50 + 2 * _OUTLINE
        self.play_box = pygame.Rect(
            int((width - outer_width) / 2), int((height - outer_height) / 2), 150, 50
        )
        self.ip_text = ""
        self.name_text = ""
        self.ip_label = self.IP_PLACEHOLDER
        self.name_label = self.NAME_PLACEHOLDER
        self.ip_active = False
        self.name_active = False

    @staticmethod
    def _hit(box: pygame.Rect, x: float, y: float) -> bool:
        return box.inflate(2 * _OUTLINE, 2 * _OUTLINE).collidepoint(x, y)

    @staticmethod
    def _edit(text: str, char: str) -> str:
        if char == "\b":
            return text[:-1]
        return text + char

    def handle_text(self, char: str) -> None:
        """Type one character, or a backspace, into the active field."""
        if self.ip_active:
            self.ip_text = self._edit(self.ip_text, char)
            self.ip_label = self.ip_text
        elif self.name_active:
            self.name_text = self._edit(self.name_text, char)
            self.name_label = self.name_text

    def handle_click(self, x: float, y: float) -> MenuResult | None:
        """Press the play button or focus a field; a result when play was hit."""
        if self._hit(self.play_box, x, y):
            return MenuResult(GameState.GAME, self.ip_text, self.name_text)
        if self._hit(self.ip_box, x, y):
            self.ip_active = True
            self.name_active = False
        else:
            self.ip_active = False
        if self._hit(self.name_box, x, y):
            self.name_active = True
            self.ip_active = False
        else:
            self.name_active = False
        return None


def _font(path: str, size: int) -> pygame.font.Font:
    try:
        return pygame.font.Font(path, size)
    except (OSError, pygame.error):
        return pygame.font.Font(None, size)


def _draw_box(screen: pygame.Surface, box: pygame.Rect, fill: tuple[int, int, int]) -> None:
    pygame.draw.rect(screen, _WHITE, box.inflate(2 * _OUTLINE, 2 * _OUTLINE))
    pygame.draw.rect(screen, fill, box)


def run_menu(screen: pygame.Surface) -> MenuResult:
    """Show the menu until play is pressed or the window is closed."""
    width, height = screen.get_size()
    form = MenuForm(width, height)
    title_font = _font(TITLE_FONT, 116)
    label_font = _font(LABEL_FONT, 16)
    button_font = _font(LABEL_FONT, 30)

    try:
        background = pygame.transform.scale(pygame.image.load(BACKGROUND_PATH), (width, height))
        sound = pygame.mixer.Sound(MENU_SOUND)
    except (pygame.error, OSError):
        return MenuResult(GameState.EXIT)
    sound.play()

    title = title_font.render("R-type", True, _WHITE)
    play = button_font.render("Play", True, _WHITE)

    while True:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return MenuResult(GameState.EXIT)
            if event.type == pygame.TEXTINPUT:
                for char in event.text:
                    form.handle_text(char)
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_BACKSPACE:
                form.handle_text("\b")
            elif event.type == pygame.MOUSEBUTTONUP:
                result = form.handle_click(*event.pos)
                if result is not None:
                    return result

        screen.blit(background, (0, 0))
        _draw_box(screen, form.name_box, _WHITE)
        _draw_box(screen, form.play_box, _RED)
        screen.blit(play, ((width - play.get_width()) / 2, (height - play.get_height() - 10) / 2))
        _draw_box(screen, form.ip_box, _WHITE)
        screen.blit(label_font.render(form.ip_label, True, _BLACK), (60, form.ip_box.top))
        screen.blit(label_font.render(form.name_label, True, _BLACK), (60, form.name_box.top))
        screen.blit(title, ((width - title.get_width()) / 2, 15))
        pygame.display.flip()
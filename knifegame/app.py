"""Game session wiring and the windowed front end with menu, arena view and results."""

from __future__ import annotations

import argparse
import math
import random
from dataclasses import dataclass, field

from knifegame.character import Character, Key, Mob, Player
from knifegame.props import Bush, Prop, PropKind, populate
from knifegame.scene import AI_COUNT, BACKGROUND_SIZE, Scene

VIEW_SIZE = (1080, 675)
MOB_OFFSET_RANGE = (-1500, 1500)
FRAME_RATE = 60

WIN_TITLE = "胜利"
LOSE_TITLE = "失败"
START_TITLE = "游戏开始"
WELCOME_TEXT = "欢迎"
START_BUTTON = "开始游戏"
QUIT_BUTTON = "退出游戏"
BACK_BUTTON = "退回"

_FONT_NAMES = "notosanscjksc,notosanscjk,wenquanyimicrohei,simhei,microsoftyahei,arialunicodems"

_PROP_COLOURS = {
    PropKind.KNIFE: (190, 190, 200),
    PropKind.HEALTH: (220, 40, 60),
    PropKind.BOOTS: (150, 90, 40),
}


def format_result(win: bool, rank: int, kills: int, seconds: int) -> str:
    """The end-of-game message shown to the player."""
    outcome = "你赢了" if win else "你输了"
    return f"{outcome}，排名：{rank}。击杀数量：{kills}。存活时间：{seconds}秒。"


@dataclass(frozen=True)
class GameResult:
    """Outcome of one finished (or running) game."""

    win: bool
    rank: int
    kills: int
    seconds: int

    @property
    def title(self) -> str:
        return WIN_TITLE if self.win else LOSE_TITLE

    @property
    def message(self) -> str:
        return format_result(self.win, self.rank, self.kills, self.seconds)


@dataclass(eq=False)
class GameSession:
    """One round: a scene with the player, the mobs and the scattered props."""

    rng: random.Random = field(default_factory=random.Random)

    def __post_init__(self) -> None:
        self.scene = Scene()
        self.elapsed_ms = 0.0
        self.win = False
        self.finished = False

        self.player = Player(self.rng)
        self.scene.add_item(self.player)
        self.player.pos = (self.scene.width / 2, self.scene.height / 2)
        self.player.knife_thrown.connect(self.scene.aim_line.create_knife_animation)

        centre_x = self.scene.width / 2.0
        centre_y = self.scene.height / 2.0
        low, high = MOB_OFFSET_RANGE
        self.mobs: list[Mob] = []
        for line in self.scene.aim_lines[:AI_COUNT]:
            mob = Mob(self.rng)
            offset_x = self.rng.randrange(low, high)
            offset_y = self.rng.randrange(low, high)
            mob.pos = (centre_x + offset_x, centre_y + offset_y)
            self.scene.add_item(mob)
            self.mobs.append(mob)
            mob.knife_thrown.connect(line.create_knife_animation)
            line.id = mob.id
            mob.mob_died.connect(self.scene.handle_mob_death)

        self.items = populate(self.scene, self.rng)

        self.scene.player_won.connect(self._on_win)
        self.player.died.connect(self._on_player_dead)

    def _on_win(self) -> None:
        self.win = True
        self.finished = True

    def _on_player_dead(self) -> None:
        self.finished = True

    def tick(self, dt_ms: float) -> None:
        """Advance the game by *dt_ms* unless it is already over."""
        if dt_ms < 0:
            raise ValueError("dt_ms must not be negative")
        if self.finished:
            return
        self.elapsed_ms += dt_ms
        self.scene.tick(dt_ms)

    def result(self) -> GameResult:
        """Rank, kills and survival time as they stand now."""
        return GameResult(
            win=self.win,
            rank=self.scene.cur_ai_num + 1,
            kills=self.scene.kill_num,
            seconds=int(self.elapsed_ms // 1000),
        )


# -- front end ---------------------------------------------------------------


def _key_map(pygame) -> dict[int, Key]:
    return {
        pygame.K_a: Key.A,
        pygame.K_d: Key.D,
        pygame.K_w: Key.W,
        pygame.K_s: Key.S,
        pygame.K_c: Key.C,
        pygame.K_x: Key.X,
        pygame.K_SPACE: Key.SPACE,
    }


def _blit_centered(screen, font, text: str, y: int, colour=(240, 240, 240)) -> None:
    surface = font.render(text, True, colour)
    screen.blit(surface, (screen.get_width() // 2 - surface.get_width() // 2, y))


def _menu(pygame, screen, font, clock) -> bool:
    """Show the start dialog; True to start a game, False to quit."""
    while True:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type == pygame.KEYDOWN:
                if event.key in (pygame.K_RETURN, pygame.K_y, pygame.K_KP_ENTER):
                    return True
                if event.key in (pygame.K_ESCAPE, pygame.K_n):
                    return False
        screen.fill((20, 20, 30))
        _blit_centered(screen, font, START_TITLE, 200)
        _blit_centered(screen, font, WELCOME_TEXT, 260)
        _blit_centered(screen, font, f"[Enter] {START_BUTTON}    [Esc] {QUIT_BUTTON}", 340)
        pygame.display.flip()
        clock.tick(FRAME_RATE)


def _draw_character(pygame, screen, character: Character, offset, font) -> None:
    ox, oy = offset
    cx, cy = character.bounding_center()
    cx, cy = cx - ox, cy - oy
    body_x, body_y = character.x - ox, character.y - oy
    if character.dead:
        pygame.draw.line(screen, (120, 120, 120), (cx - 40, cy - 40), (cx + 40, cy + 40), 6)
        pygame.draw.line(screen, (120, 120, 120), (cx - 40, cy + 40), (cx + 40, cy - 40), 6)
        return
    colour = (90, 160, 230) if isinstance(character, Player) else (230, 120, 80)
    if character.opacity < 1.0:
        colour = tuple(int(c * character.opacity + 255 * (1 - character.opacity)) for c in colour)
    pygame.draw.ellipse(screen, colour, (body_x, body_y, 160, 135))
    count = character.knife_count
    for index in range(count):
        angle = math.radians(character.rotation_angle + 360.0 / count * index)
        radius = character.knife_radius
        tip = (cx + radius * math.sin(angle), cy - radius * math.cos(angle))
        base = (cx + (radius - 40) * math.sin(angle), cy - (radius - 40) * math.cos(angle))
        pygame.draw.line(screen, (210, 210, 220), base, tip, 6)
    for index in range(character.hearts):
        pygame.draw.circle(screen, (220, 30, 50), (body_x + 30 + 16 * (index + 1), body_y + 20), 7)
    if character.high_speed:
        pygame.draw.rect(screen, (150, 90, 40), (body_x - 25, body_y - 35, 50, 50))


def _draw(pygame, screen, session: GameSession, font) -> None:
    scene = session.scene
    view_w, view_h = screen.get_size()
    px, py = session.player.bounding_center()
    offset = (px - view_w / 2, py - view_h / 2)
    ox, oy = offset

    screen.fill((0, 0, 0))
    bx, by = scene.background_pos
    radius = BACKGROUND_SIZE / 2
    pygame.draw.circle(screen, (60, 110, 60), (bx + radius - ox, by + radius - oy), radius)

    for item in scene.items()[::-1]:
        if isinstance(item, Prop) and item.visible:
            colour = _PROP_COLOURS.get(item.kind, (200, 200, 200))
            w, h = item.size
            pygame.draw.rect(screen, colour, (item.x - ox + w / 4, item.y - oy + h / 4, w / 2, h / 2))
    for character in scene.characters[::-1]:
        _draw_character(pygame, screen, character, offset, font)
    for item in scene.items()[::-1]:
        if isinstance(item, Bush):
            w, h = item.size
            pygame.draw.ellipse(screen, (30, 80, 30), (item.x - ox, item.y - oy, w, h))

    for line in (scene.aim_line, *scene.aim_lines):
        colour = (255, 0, 0) if line.is_player else (255, 255, 0)
        start = (line.start[0] - ox, line.start[1] - oy)
        end = (line.end[0] - ox, line.end[1] - oy)
        pygame.draw.line(screen, colour, start, end, 2 if not line.is_player else 4)
        for animation in line.animations:
            kx, ky = animation.position()
            pygame.draw.circle(screen, (230, 230, 240), (kx - ox, ky - oy), 10)

    result = session.result()
    hud = font.render(f"{result.kills}  /  {scene.cur_ai_num}  /  {result.seconds}s", True, (255, 255, 255))
    screen.blit(hud, (10, 10))
    pygame.display.flip()


def _play(pygame, screen, font, clock, session: GameSession) -> bool:
    """Run the round until it ends; False if the window was closed."""
    keys = _key_map(pygame)
    clock.tick()
    while not session.finished:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type == pygame.KEYDOWN and event.key in keys:
                session.player.key_press(keys[event.key])
            elif event.type == pygame.KEYUP and event.key in keys:
                session.player.key_release(keys[event.key])
        session.tick(clock.tick(FRAME_RATE))
        _draw(pygame, screen, session, font)
    return True


def _show_result(pygame, screen, font, clock, result: GameResult) -> bool:
    """Show the outcome until dismissed; False if the window was closed."""
    while True:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type in (pygame.KEYDOWN, pygame.MOUSEBUTTONDOWN):
                return True
        screen.fill((20, 20, 30))
        _blit_centered(screen, font, result.title, 200)
        _blit_centered(screen, font, result.message, 260)
        _blit_centered(screen, font, f"[{BACK_BUTTON}]", 340)
        pygame.display.flip()
        clock.tick(FRAME_RATE)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="knifegame", description="Arena knife fight.")
    parser.add_argument("--seed", type=int, default=None, help="seed for the random generator")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Open the game window and loop between the menu, a round and its result."""
    args = _parse_args(argv)
    import pygame

    pygame.init()
    try:
        screen = pygame.display.set_mode(VIEW_SIZE)
        pygame.display.set_caption(START_TITLE)
        font = pygame.font.SysFont(_FONT_NAMES, 28)
        clock = pygame.time.Clock()
        rng = random.Random(args.seed)
        while True:
            if not _menu(pygame, screen, font, clock):
                return 0
            session = GameSession(rng)
            if not _play(pygame, screen, font, clock, session):
                return 0
            if not _show_result(pygame, screen, font, clock, session.result()):
                return 0
    finally:
        pygame.quit()


if __name__ == "__main__":
    raise SystemExit(main())
# jumpjump/game/game.py
import argparse
import logging
import sys
import pygame
from pygame import K_SPACE, K_ESCAPE, K_r, K_n
from .config import (
    GameConfig, WIDTH, HEIGHT, FPS, SEED_DEFAULT,
    COLOR_BG, COLOR_GROUND, COLOR_FG, COLOR_PLAYER, COLOR_DANGER,
    COLOR_CHARGE, COLOR_CHARGE_HOT,
)
from .events import dispatch, EventType
from .feedback import FeedbackRouter, HostCapabilities, LogAudio
from .level import draw_platforms
from .session import GameSession, GameState, SessionSnapshot

logger = logging.getLogger(__name__)

PRESS_KEYS = (K_SPACE,)


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Charge-and-jump arcade game")
    p.add_argument("--seed", type=int, default=None,
                   help="Level seed. Omit for SEED_DEFAULT, use -1 for random each launch.")
    p.add_argument("--width", type=int, default=None)
    p.add_argument("--height", type=int, default=None)
    p.add_argument("--mobile", action="store_true", help="Use the phone tuning profile")
    p.add_argument("--log-level", type=str, default="INFO")
    return p.parse_args(argv)


# -------------------- Rendering --------------------

def draw_world(screen: pygame.Surface, snap: SessionSnapshot, font=None):
    """Draw one frame from a snapshot. Reads nothing but the snapshot."""
    cfg = snap.config
    cam = snap.camera_x

    screen.fill(COLOR_BG)
    ground = pygame.Rect(0, int(cfg.ground_y + cfg.platform_height), cfg.width, cfg.height)
    pygame.draw.rect(screen, COLOR_GROUND, ground)

    draw_platforms(screen, snap.platforms, cam)

    pr = snap.player.rect
    pr.x = int(snap.player.x - cam)
    color = COLOR_DANGER if snap.state == GameState.GAME_OVER else COLOR_PLAYER
    pygame.draw.rect(screen, color, pr, border_radius=max(2, pr.w // 6))

    if font is None:
        return

    screen.blit(font.render(f"Score: {snap.score}", True, COLOR_FG), (20, 20))
    if snap.combo > 0:
        screen.blit(font.render(f"Combo: {snap.combo}", True, COLOR_PLAYER), (20, 46))

    if snap.state == GameState.START:
        hint = "Hold SPACE / mouse to charge, release to jump"
    elif snap.state == GameState.CHARGING:
        hint = "Charging... release to jump"
        _draw_charge_bar(screen, snap)
    else:
        hint = ""
    if hint:
        screen.blit(font.render(hint, True, COLOR_FG), (20, cfg.height - 40))

    if snap.state == GameState.GAME_OVER:
        _draw_game_over(screen, snap, font)


def _draw_charge_bar(screen: pygame.Surface, snap: SessionSnapshot):
    cfg = snap.config
    bar_w, bar_h = 200, 20
    x, y = (cfg.width - bar_w) // 2, 100
    frac = snap.charge_power / cfg.max_power
    pygame.draw.rect(screen, (221, 221, 221), (x, y, bar_w, bar_h))
    fill_color = COLOR_CHARGE_HOT if snap.charge_power > 0.8 else COLOR_CHARGE
    pygame.draw.rect(screen, fill_color, (x, y, int(frac * bar_w), bar_h))
    pygame.draw.rect(screen, COLOR_FG, (x, y, bar_w, bar_h), width=2)


def _draw_game_over(screen: pygame.Surface, snap: SessionSnapshot, font):
    cfg = snap.config
    shade = pygame.Surface((cfg.width, cfg.height), pygame.SRCALPHA)
    shade.fill((0, 0, 0, 178))
    screen.blit(shade, (0, 0))
    lines = ("GAME OVER", f"Final score: {snap.score}", "Press to restart (R same seed, N new)")
    for i, msg in enumerate(lines):
        txt = font.render(msg, True, (255, 255, 255))
        screen.blit(txt, (cfg.width // 2 - txt.get_width() // 2, cfg.height // 2 - 40 + i * 30))


# -------------------- Loop --------------------

def _primary_pointer(event) -> bool:
    """Left button or a finger; touch-emulated mouse events are dropped so a tap counts once."""
    if event.type in (pygame.FINGERDOWN, pygame.FINGERUP):
        return True
    return event.button == 1 and not getattr(event, "touch", False)


class GameLoop:
    """
    Owns the window and drives the session at a fixed tick rate.
    `stop()` may be called any number of times; the session is left as-is and can be resumed.
    """
    def __init__(self, session: GameSession, caps: HostCapabilities = None, mobile: bool = False):
        self.session = session
        self.router = FeedbackRouter(caps or HostCapabilities())
        self.handlers = [self.router.handle]
        self.mobile = mobile
        self.running = False
        self.screen = None
        self.clock = None
        self.font = None

    def _open(self):
        cfg = self.session.config
        pygame.init()
        pygame.display.set_caption("Jump Jump")
        self.screen = pygame.display.set_mode((cfg.width, cfg.height), pygame.RESIZABLE)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("arial", 22, bold=True)

    def handle_event(self, event) -> None:
        s = self.session
        if event.type == pygame.QUIT:
            self.stop()
        elif event.type == pygame.KEYDOWN:
            if event.key == K_ESCAPE:
                self.stop()
            elif event.key in PRESS_KEYS:
                s.press()
            elif event.key == K_r and s.state == GameState.GAME_OVER:
                s.reset(seed=s.seed)   # same layout again
            elif event.key == K_n and s.state == GameState.GAME_OVER:
                s.reset(seed=None)     # fresh random layout
        elif event.type == pygame.KEYUP and event.key in PRESS_KEYS:
            s.release()
        elif event.type in (pygame.MOUSEBUTTONDOWN, pygame.FINGERDOWN):
            if _primary_pointer(event):
                s.press()
        elif event.type in (pygame.MOUSEBUTTONUP, pygame.FINGERUP):
            if _primary_pointer(event):
                s.release()
        elif event.type == pygame.VIDEORESIZE:
            s.resize(event.w, event.h, mobile=self.mobile)

    def run(self):
        if self.screen is None:
            self._open()
        self.running = True
        logger.info("Game loop started")
        while self.running:
            self.clock.tick(FPS)
            for event in pygame.event.get():
                self.handle_event(event)
            if not self.running:
                break

            events = self.session.tick()
            dispatch(events, self.handlers)
            for e in events:
                if e.type == EventType.GAME_OVER:
                    logger.info(f"Game over ({e.data.get('reason')}) score={e.data.get('score')}")

            draw_world(self.screen, self.session.snapshot(), self.font)
            pygame.display.flip()
        self.close()

    def stop(self):
        if self.running:
            logger.info("Game loop stopping")
        self.running = False

    def close(self):
        if self.screen is not None:
            pygame.display.quit()
            pygame.quit()
            self.screen = None
            self.clock = None
            self.font = None


def run(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    # Resolve seed: None -> use SEED_DEFAULT; -1 -> random
    if args.seed is None:
        launch_seed = SEED_DEFAULT
    elif args.seed == -1:
        launch_seed = None
    else:
        launch_seed = args.seed

    if args.width or args.height or args.mobile:
        cfg = GameConfig.for_viewport(args.width or WIDTH, args.height or HEIGHT,
                                      mobile=args.mobile)
    else:
        cfg = GameConfig()

    session = GameSession(cfg, seed=launch_seed)
    loop = GameLoop(session, HostCapabilities(audio=LogAudio()), mobile=args.mobile)
    try:
        loop.run()
    finally:
        loop.stop()
        loop.close()
    return 0


if __name__ == "__main__":
    sys.exit(run())

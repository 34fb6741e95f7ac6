"""pygame driver: feeds keys and timers into a Session and draws it."""
import argparse
import logging
import sys

import pygame

from tetris_config import CONFIG, SessionConfig
from tetris_input import KEYMAP, RESTART_KEY, ShiftRepeat
from tetris_layout import compute_dims
from tetris_render import RenderAssets
from tetris_session import COMMANDS, new_session, restart, soft_drop_step
from tetris_timers import Scheduler

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Falling-block puzzle game")
    p.add_argument("-v", "--verbose", action="store_true", help="log every lock and hold")
    p.add_argument("--seed", type=int, default=CONFIG["SEED"], help="randomizer seed")
    p.add_argument("--time-limit", type=int, default=CONFIG["TIME_LIMIT_S"], help="session length in seconds")
    p.add_argument("--next", type=int, default=CONFIG["NEXT_DEPTH"], help="next-queue depth")
    return p.parse_args(argv)


def recreate_window(dims, flags=pygame.DOUBLEBUF):
    try:
        return pygame.display.set_mode((dims.total_w, dims.total_h), flags, vsync=1)
    except TypeError:
        return pygame.display.set_mode((dims.total_w, dims.total_h), flags)


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.verbose)

    cfg = SessionConfig.from_dict({**CONFIG, "SEED": args.seed,
                                   "TIME_LIMIT_S": args.time_limit, "NEXT_DEPTH": args.next})

    pygame.init()
    pygame.event.set_allowed([pygame.QUIT, pygame.KEYDOWN, pygame.KEYUP])

    dims = compute_dims(int(CONFIG["CELL_SIZE"]), cfg.cols, cfg.visible_rows)
    screen = recreate_window(dims)
    pygame.display.set_caption("Falling Blocks: 7-bag, SRS kicks, lock delay")
    font = pygame.font.SysFont(None, 22)
    big_font = pygame.font.SysFont(None, 42)
    render = RenderAssets(dims, font, big_font)
    clock = pygame.time.Clock()

    session = new_session(cfg)
    sched = Scheduler(cfg.lock_delay_ms)
    sched.sync(session, pygame.time.get_ticks())
    shift = ShiftRepeat(CONFIG["DAS_MS"], CONFIG["ARR_MS"])
    soft_drop_held = False

    while True:
        dt = clock.tick_busy_loop(60)
        now = pygame.time.get_ticks()

        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                sched.cancel_all()
                pygame.quit()
                sys.exit()
            if e.type == pygame.KEYDOWN:
                if e.key == RESTART_KEY:
                    logger.info("restart requested")
                    session = restart(session)
                    sched.cancel_all()
                elif e.key in KEYMAP:
                    session = COMMANDS[KEYMAP[e.key]](session)
                elif e.key == pygame.K_DOWN:
                    soft_drop_held = True
                sched.sync(session, now)
            if e.type == pygame.KEYUP and e.key == pygame.K_DOWN:
                soft_drop_held = False

        if soft_drop_held:
            session = soft_drop_step(session)
            sched.sync(session, now)

        keys = pygame.key.get_pressed()
        name = shift.update(dt, keys[pygame.K_LEFT], keys[pygame.K_RIGHT])
        if name:
            session = COMMANDS[name](session)
            sched.sync(session, now)

        session = sched.run_due(session, now)

        render.draw(screen, session)
        pygame.display.flip()


if __name__ == '__main__':
    main()

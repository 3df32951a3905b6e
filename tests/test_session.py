import math

import pytest

from blaster.entities import Enemy, Shot
from blaster.scores import MemoryHighScoreStore
from blaster.session import GameSession, GameState
from blaster.surface import RecordingSurface


def place_hit(session, radius):
    """An enemy to the right of the player with a shot sitting on its centre"""
    enemy = Enemy(x=600, y=300, radius=radius, color=(200, 0, 0))
    shot = Shot(x=600, y=300, radius=5, color=(255, 255, 255), angle=0.0)
    session.enemies.append(enemy)
    session.shots.append(shot)
    return enemy, shot


class TestLifecycle:
    def test_new_session_is_ready(self, make_session):
        session = make_session()
        assert session.state is GameState.READY
        assert not session.enemy_timer.active
        assert session.step(16) is False

    def test_start_arms_enemy_timer(self, session):
        assert session.running
        assert session.enemy_timer.active
        assert not session.shot_timer.active

    def test_rejects_bad_viewport(self, store):
        with pytest.raises(ValueError):
            GameSession(0, 600, store=store)

    def test_rejects_negative_delta(self, session):
        with pytest.raises(ValueError):
            session.step(-1)

    def test_restart_builds_fresh_session(self, session, store):
        session.score = 3
        session.enemies.append(Enemy(x=0, y=0, radius=10))
        fresh = session.restart()

        assert fresh is not session
        assert fresh.state is GameState.READY
        assert fresh.score == 0
        assert fresh.enemies == []
        assert fresh.store is store
        assert not session.enemy_timer.active


class TestCombat:
    def test_large_enemy_survives_hit(self, session):
        enemy, _ = place_hit(session, radius=20)
        session.step(0)

        assert session.enemies == [enemy]
        assert session.shots == []
        assert session.score == 0
        assert enemy.target_radius == pytest.approx(10)

    def test_shrink_is_animated_not_instant(self, session):
        enemy, _ = place_hit(session, radius=20)
        session.step(0)
        assert enemy.radius == pytest.approx(20)

        session.step(250)
        assert 10 < enemy.radius < 20

        session.step(250)
        assert enemy.radius == pytest.approx(10)

    def test_small_enemy_destroyed_for_a_point(self, session):
        place_hit(session, radius=14)
        session.step(0)

        assert session.enemies == []
        assert session.shots == []
        assert session.score == 1

    def test_particle_burst_scales_with_radius(self, session):
        place_hit(session, radius=20)
        session.step(0)
        assert len(session.particles) == 40

    def test_particle_burst_on_kill(self, session):
        place_hit(session, radius=14)
        session.step(0)
        assert len(session.particles) == 28
        assert all(p.color == (255, 255, 255) for p in session.particles)

    def test_missing_shot_is_kept(self, session):
        session.enemies.append(Enemy(x=700, y=100, radius=10))
        shot = Shot(x=200, y=500, radius=5, angle=0.0)
        session.shots.append(shot)
        session.step(0)
        assert session.shots == [shot]
        assert len(session.enemies) == 1

    def test_particles_expire(self, session):
        place_hit(session, radius=14)
        session.step(0)
        assert session.particles

        for _ in range(101):
            session.step(0)
        assert session.particles == []


class TestGameOver:
    def test_touching_enemy_ends_game(self, session, store):
        player = session.player
        session.enemies.append(Enemy(x=player.x + 15, y=player.y, radius=10))
        session.score = 4

        assert session.step(16) is False
        assert session.state is GameState.OVER
        assert not session.enemy_timer.active
        assert store.load() == 4
        assert session.high_score == 4

    def test_over_session_no_longer_steps(self, session):
        session.game_over()
        frame = session.frame_count
        assert session.step(16) is False
        assert session.frame(16, RecordingSurface()) is False
        assert session.frame_count == frame

    def test_high_score_kept_when_beaten_by_nobody(self, make_session):
        store = MemoryHighScoreStore(initial=7)
        session = make_session(store=store)
        session.start()
        session.score = 5
        assert session.game_over() == 7
        assert store.load() == 7

    def test_high_score_replaced(self, make_session):
        store = MemoryHighScoreStore(initial=7)
        session = make_session(store=store)
        session.start()
        session.score = 9
        assert session.game_over() == 9
        assert store.load() == 9

    def test_game_over_is_idempotent(self, session, store):
        session.press_fire(100, 100)
        session.score = 2

        assert session.game_over() == 2
        assert session.game_over() == 2

        assert session.enemy_timer.cancel_count == 1
        assert session.shot_timer.cancel_count == 1
        assert store.write_count == 1
        assert store.load() == 2

    def test_fire_after_game_over_does_not_rearm(self, session):
        session.game_over()
        session.press_fire(10, 10)
        assert not session.shot_timer.active


class TestSpawning:
    def test_enemy_every_second(self, session):
        session.step(999)
        assert session.enemies == []
        session.step(1)
        assert len(session.enemies) == 1
        session.step(999)
        assert len(session.enemies) == 1

    def test_enemy_cap(self, make_session):
        session = make_session(max_enemies=1)
        session.start()
        session.step(1000)
        session.step(1000)
        assert len(session.enemies) == 1

    def test_shots_while_fire_held(self, session):
        session.press_fire(700, 300)
        session.step(99)
        assert session.shots == []

        session.step(1)
        assert len(session.shots) == 1
        assert session.shots[0].angle == pytest.approx(math.pi / 2)

        session.release_fire()
        session.step(500)
        assert len(session.shots) == 1

    def test_pointer_moves_aim_for_later_shots_only(self, session):
        session.press_fire(700, 300)
        session.step(100)
        first = session.shots[0]

        session.move_pointer(400, 600)
        session.step(100)
        assert first.angle == pytest.approx(math.pi / 2)
        assert session.shots[1].angle == pytest.approx(0.0)

    def test_repeated_press_does_not_stack_timers(self, session):
        session.press_fire(700, 300)
        session.press_fire(700, 300)
        session.step(100)
        assert len(session.shots) == 1

    def test_shots_leaving_viewport_are_culled(self, session):
        session.shots.append(Shot(x=-10, y=300, radius=5))
        session.step(0)
        assert session.shots == []


class TestInput:
    def test_held_key_moves_player(self, session):
        session.press_key("D")
        session.press_key("d")
        assert session.keys_pressed == ["d"]

        session.step(100)
        assert session.player.x == pytest.approx(500)

        session.release_key("d")
        session.step(100)
        assert session.player.x == pytest.approx(500)

    def test_two_keys_move_diagonally(self, session):
        session.press_key("w")
        session.press_key("a")
        session.step(50)
        assert (session.player.x, session.player.y) == pytest.approx((350, 250))

    def test_resize_keeps_player_inside(self, session):
        session.resize(300, 200)
        assert 50 <= session.player.x <= 250
        assert 50 <= session.player.y <= 150

    def test_resize_rejects_empty_viewport(self, session):
        with pytest.raises(ValueError):
            session.resize(0, 100)


class TestFrame:
    def test_frame_fades_then_draws(self, session):
        place_hit(session, radius=20)
        surface = RecordingSurface()
        assert session.frame(0, surface) is True

        name, args = surface.calls[0]
        assert name == "fill_rect"
        assert args == (0, 0, 800, 600, (0, 0, 0, 26))
        # player + surviving enemy + 40 particles
        assert surface.count("fill_circle") == 42

    def test_shots_move_before_enemy_hits_are_checked(self, make_session):
        session = make_session(enemy_speed=0)
        session.start()
        session.enemies.append(Enemy(x=600, y=300, radius=14))
        # 30 px short of the centre: gap 11, closes to -9 after a 20 px move
        session.shots.append(Shot(x=570, y=300, radius=5, angle=math.pi / 2))

        session.step(30)

        assert session.score == 1
        assert session.enemies == []
        assert session.shots == []
        assert len(session.particles) == 28

    def test_player_moves_before_enemy_contact_is_checked(self, make_session):
        session = make_session(enemy_speed=0)
        session.start()
        session.enemies.append(Enemy(x=440, y=300, radius=10))
        session.press_key("d")

        assert session.step(25) is False
        assert session.player.x == pytest.approx(425)
        assert session.state is GameState.OVER

    def test_ready_session_draws_nothing(self, make_session):
        surface = RecordingSurface()
        assert make_session().frame(16, surface) is False
        assert surface.calls == []

    def test_info(self, session):
        info = session.info()
        assert info["state"] == "running"
        assert info["score"] == 0
        assert info["num_enemies"] == 0

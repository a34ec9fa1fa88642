import pytest

from knifegame.aimline import CENTER_BIAS, KNIFE_FLIGHT_MS, AimLine, KnifeAnimation


def test_set_start_and_end_apply_center_bias():
    line = AimLine()
    line.set_start((10, 20))
    line.set_end((30, 40))
    assert line.start == (10 + CENTER_BIAS, 20 + CENTER_BIAS)
    assert line.end == (30 + CENTER_BIAS, 40 + CENTER_BIAS)


def test_set_start_at_origin_is_offset_by_eighty():
    line = AimLine()
    line.set_start((0, 0))
    assert line.start == (80, 80)


def test_set_line_is_exact():
    line = AimLine()
    line.set_line((1, 2), (3, 4))
    assert line.start == (1.0, 2.0)
    assert line.end == (3.0, 4.0)


def test_bounding_rect_covers_line_with_pen_margin():
    line = AimLine()
    line.set_line((50, 10), (20, 70))
    left, top, width, height = line.bounding_rect()
    margin = line.pen_width / 2
    assert left == 20 - margin
    assert top == 10 - margin
    assert left + width == 50 + margin
    assert top + height == 70 + margin


def test_bounding_rect_of_point_line_is_not_empty():
    line = AimLine()
    _, _, width, height = line.bounding_rect()
    assert width >= 1.0 and height >= 1.0


def test_knife_animation_moves_linearly():
    anim = KnifeAnimation((0, 0), (100, 200))
    assert anim.position() == (0, 0)
    anim.advance(KNIFE_FLIGHT_MS / 2)
    assert anim.position() == pytest.approx((50, 100))
    assert anim.advance(KNIFE_FLIGHT_MS) is True
    assert anim.position() == (100, 200)


def test_knife_animation_rejects_negative_time():
    with pytest.raises(ValueError):
        KnifeAnimation((0, 0), (1, 1)).advance(-1)


def test_knife_rotation_horizontal_right():
    assert KnifeAnimation((0, 0), (10, 0)).rotation == pytest.approx(90)


def test_knife_rotation_pointing_up():
    assert KnifeAnimation((0, 10), (0, 0)).rotation == pytest.approx(0)


def test_create_knife_animation_uses_current_line():
    line = AimLine()
    line.set_line((5, 5), (15, 25))
    anim = line.create_knife_animation()
    assert anim.start == line.start
    assert anim.end == line.end
    assert line.animations == [anim]


def test_update_removes_finished_animations():
    line = AimLine()
    line.set_line((0, 0), (10, 10))
    first = line.create_knife_animation()
    line.update(100)
    second = line.create_knife_animation()
    line.update(60)
    assert line.animations == [second]
    assert first.finished
    line.update(KNIFE_FLIGHT_MS)
    assert line.animations == []
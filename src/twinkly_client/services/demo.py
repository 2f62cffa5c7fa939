"""Pre-programmed demo movie."""

from twinkly_client.domain.movie import Frame, Movie, Pixel

RED = Pixel(r=255)
GREEN = Pixel(g=255)
BLUE = Pixel(b=255)


def build_demo_movie(led_count: int, frame_delay: int = 500) -> Movie:
    """Build a red frame with blue strand-start markers followed by a green frame.

    The device is wired as two strands of equal length, so the first LED of
    each strand is marked blue.
    """
    movie = Movie(led_count=led_count, frame_delay=frame_delay)

    red_frame = Frame(led_count)
    red_frame.fill(RED)
    if led_count:
        red_frame[0] = BLUE
        red_frame[led_count // 2] = BLUE
    movie.append(red_frame)

    green_frame = Frame(led_count)
    green_frame.fill(GREEN)
    movie.append(green_frame)
    return movie

# geometry.py
# Small collision helpers shared by both games. Rects are (x, y, w, h) tuples.


def clamp(v, lo, hi):
    return max(lo, min(hi, v))


def circle_hits_rect(cx, cy, r, rect):
    """Nearest point on the rect to the circle center, compared against r."""
    rx, ry, rw, rh = rect
    nx = clamp(cx, rx, rx + rw)
    ny = clamp(cy, ry, ry + rh)
    dx = cx - nx; dy = cy - ny
    return dx*dx + dy*dy < r*r


def circle_touches_rect(cx, cy, r, rect):
    # inclusive variant for paddles, a ball grazing the face still bounces
    rx, ry, rw, rh = rect
    return rx - r <= cx <= rx + rw + r and ry <= cy <= ry + rh

# fractal_canvas/utils.py

def parse_complex(s: str) -> complex:
    """
    Parse strings like '-0.8+0.156j' or '0.285-0.01j' into a complex number.
    """
    s = str(s).strip().lower().replace(" ", "").replace("i", "j")
    if s.endswith("j"):
        return complex(s)
    # allow plain real numbers too
    return complex(float(s), 0.0)

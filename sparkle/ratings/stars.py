"""Star rendering helpers."""


def star_fill_percentages(rating: float, stars: int = 5) -> list[float]:
    """Fill percentage (0-100) of each star for a rating.

    The rating is clamped to ``[0, stars]``. For 4.7 this yields
    ``[100, 100, 100, 100, 70]`` (up to float rounding).
    """
    clamped = max(0.0, min(float(stars), float(rating)))
    percentages = []
    for i in range(1, stars + 1):
        if clamped >= i:
            percentages.append(100.0)
        elif clamped >= i - 1:
            percentages.append((clamped - (i - 1)) * 100)
        else:
            percentages.append(0.0)
    return percentages

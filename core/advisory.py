def is_odd_lot(units: int, min_lot_size: int = 10) -> bool:
    """
    Odd lot: fewer units than the exchange's standard trading lot.
    units == 0 means "not specified" and never triggers the advisory.
    """
    return 0 < units < min_lot_size

def compact_order(items, order_field="position"):
    """
    Re-assigns sequential order values (1..N), keeping the relative order
    of the given items. Items without a value keep their list position.
    """
    keyed = [
        (getattr(item, order_field) if getattr(item, order_field) is not None else index, index, item)
        for index, item in enumerate(items, start=1)
    ]
    keyed.sort(key=lambda entry: (entry[0], entry[1]))

    for position, (_, _, item) in enumerate(keyed, start=1):
        setattr(item, order_field, position)

    return [item for _, _, item in keyed]

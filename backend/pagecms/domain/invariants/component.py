from ..exceptions import InvariantViolation


def assert_component_order(components):
    positions = [component.position for component in components]
    if not positions:
        return

    expected = list(range(1, len(positions) + 1))
    if sorted(positions) != expected:
        raise InvariantViolation(
            f"Component positions are not consecutive starting from 1: {positions}"
        )


def assert_component(component):
    if not component.type or not isinstance(component.type, str):
        raise InvariantViolation("Component type is required.")

    if component.props is not None and not isinstance(component.props, dict):
        raise InvariantViolation(
            f"{component.type} component props must be an object."
        )

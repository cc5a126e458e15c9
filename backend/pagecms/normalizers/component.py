def normalize_component(component):
    return {
        "id": component.id,
        "type": component.type,
        "position": component.position,
        "props": component.props or {},
    }

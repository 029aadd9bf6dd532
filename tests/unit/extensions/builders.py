"""Template node builders shared by the extension tests."""


def element(tag, *children, **fields):
    """Element node mapping; text children may be given as plain strings."""
    node = {"type": "element", "tag": tag, **fields}
    if children:
        node["children"] = [
            {"type": "text", "content": child} if isinstance(child, str) else child
            for child in children
        ]
    return node

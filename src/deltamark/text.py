"""Extract plain text from deltamark documents.

Drops all formatting. Span embeds contribute their text payload (so
hashtags and references survive), block embeds contribute nothing.

Example:
    >>> from deltamark import decode, extract_text
    >>> extract_text(decode("# Hello **World**\\n\\nsee #news"))
    'Hello World\\nsee #news'
"""

from deltamark.document import BlockNode, Document, EmbedNode, LineNode, TextNode


def extract_text(node: Document | BlockNode | LineNode | TextNode | EmbedNode) -> str:
    """Extract plain text from any document node.

    Lines are joined with a newline.

    Args:
        node: Document, block, line, or leaf node.

    Returns:
        Concatenated plain text from the node and its descendants.

    """
    match node:
        case TextNode():
            return node.value
        case EmbedNode():
            if not node.value.inline:
                return ""
            return node.value.text or ""
        case LineNode():
            return "".join(extract_text(c) for c in node.children)
        case BlockNode():
            return "\n".join(extract_text(c) for c in node.children)
        case Document():
            return "\n".join(extract_text(c) for c in node.children)
        case _:
            return ""

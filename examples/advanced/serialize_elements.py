"""Hand a laid-out document to another process as JSON."""

from markdown2pdf import convert
from markdown2pdf.serialization import elements_from_json, elements_to_json

elements = convert("# Report\n\nThis layout can be *serialized* and restored.")

json_str = elements_to_json(elements)
restored = elements_from_json(json_str)

print("Original == restored:", elements == restored)
print("JSON length:", len(json_str), "chars")

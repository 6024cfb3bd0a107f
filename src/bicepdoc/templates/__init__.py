"""📝 Documentation Templates - Markdown section generators for resource docs.

Templates for generating:
- YAML front matter block
- Heading and example usage sections
- Custom sections
- Argument/attribute reference sections

Each template returns a list of lines; every emitted block ends with a blank
line so that the renderer can simply concatenate them.
"""

from .examples import generate_examples, generate_heading
from .front_matter import generate_front_matter
from .reference import generate_custom_sections, generate_property_reference

__all__ = [
    "generate_front_matter",
    "generate_heading",
    "generate_examples",
    "generate_custom_sections",
    "generate_property_reference",
]

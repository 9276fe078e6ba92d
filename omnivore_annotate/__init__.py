"""
omnivore-annotate - label-driven LLM automation for Omnivore.

Add a ``do:<operation>`` label to an Omnivore article and the webhook
service answers with either:

- **Tags**: ``do:tags`` asks the model for new labels that fit the
  workspace taxonomy and adds them to the article
- **Notes**: any other ``do`` label runs the label's description as a
  prompt over the article and writes the reply as the article note

Finished actions are marked with the matching ``did:<operation>`` label.

Quick Start:
    >>> from omnivore_annotate.automation import classify_labels, assemble_prompt
    >>> classify_labels([{"name": "do:tags"}, {"name": "python"}])
    ['do:tags']
    >>> assemble_prompt(["Summarize", None, "Article title: Hello"])
    '- Summarize\\n- Article title: Hello'

Run the service with ``uvicorn omnivore_annotate.app.main:app``.
"""

__version__ = "0.1.0"
__license__ = "MIT"

__all__ = [
    "__version__",
    "__license__",
]

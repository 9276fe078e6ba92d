"""GraphQL documents used by the Omnivore client."""

from __future__ import annotations

HIGHLIGHT_FIELDS_FRAGMENT = """
fragment HighlightFields on Highlight {
  id
  type
  shortId
  quote
  prefix
  suffix
  patch
  color
  annotation
  createdByMe
  createdAt
  updatedAt
  sharedAt
  highlightPositionPercent
  highlightPositionAnchorIndex
  labels {
    id
    name
    color
    createdAt
  }
}
"""

ARTICLE_QUERY = """
query Article($username: String!, $slug: String!, $format: String) {
  article(username: $username, slug: $slug, format: $format) {
    ... on ArticleSuccess {
      article {
        id
        title
        content
        labels {
          id
          name
          color
          description
        }
        highlights(input: { includeFriends: false }) {
          id
          shortId
          type
          annotation
        }
      }
    }
    ... on ArticleError {
      errorCodes
    }
  }
}
"""

LABELS_QUERY = """
query Labels {
  labels {
    ... on LabelsSuccess {
      labels {
        id
        name
        color
        description
        createdAt
      }
    }
    ... on LabelsError {
      errorCodes
    }
  }
}
"""

SET_LABELS_MUTATION = """
mutation SetLabels($input: SetLabelsInput!) {
  setLabels(input: $input) {
    ... on SetLabelsSuccess {
      labels {
        id
        name
        color
        description
      }
    }
    ... on SetLabelsError {
      errorCodes
    }
  }
}
"""

CREATE_HIGHLIGHT_MUTATION = (
    """
mutation CreateHighlight($input: CreateHighlightInput!) {
  createHighlight(input: $input) {
    ... on CreateHighlightSuccess {
      highlight {
        ...HighlightFields
      }
    }
    ... on CreateHighlightError {
      errorCodes
    }
  }
}
"""
    + HIGHLIGHT_FIELDS_FRAGMENT
)

UPDATE_HIGHLIGHT_MUTATION = (
    """
mutation UpdateHighlight($input: UpdateHighlightInput!) {
  updateHighlight(input: $input) {
    ... on UpdateHighlightSuccess {
      highlight {
        ...HighlightFields
      }
    }
    ... on UpdateHighlightError {
      errorCodes
    }
  }
}
"""
    + HIGHLIGHT_FIELDS_FRAGMENT
)

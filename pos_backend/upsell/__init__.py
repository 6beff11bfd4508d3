"""
AI upsell suggestions.

Responsibilities:
- Build the suggestion request from the cart and the catalog.
- Call the text-generation provider, retrying transport failures.
- Extract the JSON array from free-text model output.
- Match suggested names back to catalog records.
- Fall back to a deterministic list when the provider is unusable.
"""

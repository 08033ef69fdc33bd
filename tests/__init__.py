"""Test suite for cuelight.

Test Structure:
- unit/: Unit tests for individual components, mirroring packages/cuelight/core
  - agents/: prompt construction, response parsing, completion providers
  - lighting/: scene generation, recommendations, value validation
  - cues/: synthesis, analysis, optimization, editing, playback
  - fixtures/: bulk operations and channel occupancy
  - backend/, api/: GraphQL client over a mocked HTTP transport
- conftest.py: Shared fixtures (sample rig, cue lists, mocked collaborators)
"""

"""GraphQL documents used by GraphQLBackendClient."""

CHANNEL_FIELDS = """
  id
  offset
  name
  type
  minValue
  maxValue
  defaultValue
"""

FIXTURE_FIELDS = f"""
  id
  name
  description
  universe
  startChannel
  tags
  definitionId
  manufacturer
  model
  type
  modeName
  channelCount
  channels {{{CHANNEL_FIELDS}}}
"""

CUE_FIELDS = """
  id
  name
  cueNumber
  fadeInTime
  fadeOutTime
  followTime
  easingType
  notes
  scene {
    id
    name
  }
"""

SCENE_FIELDS = """
  id
  name
  description
  fixtureValues {
    fixture {
      id
      name
    }
    channelValues
  }
"""

CUE_LIST_FIELDS = f"""
  id
  name
  description
  loop
  cues {{{CUE_FIELDS}}}
"""

PROJECT_FIELDS = f"""
  id
  name
  description
  fixtures {{{FIXTURE_FIELDS}}}
  scenes {{{SCENE_FIELDS}}}
  cueLists {{{CUE_LIST_FIELDS}}}
"""

DEFINITION_FIELDS = f"""
  id
  manufacturer
  model
  type
  isBuiltIn
  channels {{{CHANNEL_FIELDS}}}
  modes {{
    id
    name
    shortName
    channelCount
  }}
"""

GET_PROJECTS = f"query GetProjects {{ projects {{{PROJECT_FIELDS}}} }}"

GET_PROJECT = f"query GetProject($id: ID!) {{ project(id: $id) {{{PROJECT_FIELDS}}} }}"

GET_CUE_LIST = f"query GetCueList($id: ID!) {{ cueList(id: $id) {{{CUE_LIST_FIELDS}}} }}"

CREATE_CUE_LIST = f"""
mutation CreateCueList($input: CreateCueListInput!) {{
  createCueList(input: $input) {{{CUE_LIST_FIELDS}}}
}}
"""

UPDATE_CUE_LIST = f"""
mutation UpdateCueList($id: ID!, $input: UpdateCueListInput!) {{
  updateCueList(id: $id, input: $input) {{{CUE_LIST_FIELDS}}}
}}
"""

DELETE_CUE_LIST = "mutation DeleteCueList($id: ID!) { deleteCueList(id: $id) }"

CREATE_CUE = f"""
mutation CreateCue($input: CreateCueInput!) {{
  createCue(input: $input) {{{CUE_FIELDS}}}
}}
"""

UPDATE_CUE = f"""
mutation UpdateCue($id: ID!, $input: UpdateCueInput!) {{
  updateCue(id: $id, input: $input) {{{CUE_FIELDS}}}
}}
"""

DELETE_CUE = "mutation DeleteCue($id: ID!) { deleteCue(id: $id) }"

BULK_UPDATE_CUES = f"""
mutation BulkUpdateCues($input: BulkCueUpdateInput!) {{
  bulkUpdateCues(input: $input) {{{CUE_FIELDS}}}
}}
"""

GET_FIXTURE_INSTANCES = f"""
query GetFixtureInstances(
  $projectId: ID!, $filter: FixtureFilterInput, $page: Int, $perPage: Int
) {{
  fixtureInstances(projectId: $projectId, filter: $filter, page: $page, perPage: $perPage) {{
    fixtures {{{FIXTURE_FIELDS}}}
    pagination {{
      total
      page
      perPage
      totalPages
      hasMore
    }}
  }}
}}
"""

GET_FIXTURE_INSTANCE = (
    f"query GetFixtureInstance($id: ID!) {{ fixtureInstance(id: $id) {{{FIXTURE_FIELDS}}} }}"
)

CREATE_FIXTURE_INSTANCE = f"""
mutation CreateFixtureInstance($input: CreateFixtureInstanceInput!) {{
  createFixtureInstance(input: $input) {{{FIXTURE_FIELDS}}}
}}
"""

UPDATE_FIXTURE_INSTANCE = f"""
mutation UpdateFixtureInstance($id: ID!, $input: UpdateFixtureInstanceInput!) {{
  updateFixtureInstance(id: $id, input: $input) {{{FIXTURE_FIELDS}}}
}}
"""

DELETE_FIXTURE_INSTANCE = (
    "mutation DeleteFixtureInstance($id: ID!) { deleteFixtureInstance(id: $id) }"
)

BULK_UPDATE_FIXTURES = f"""
mutation BulkUpdateFixtures($input: BulkFixtureUpdateInput!) {{
  bulkUpdateFixtures(input: $input) {{{FIXTURE_FIELDS}}}
}}
"""

BULK_DELETE_FIXTURES = """
mutation BulkDeleteFixtures($fixtureIds: [ID!]!) {
  bulkDeleteFixtures(fixtureIds: $fixtureIds) {
    deletedCount
    deletedIds
  }
}
"""

GET_FIXTURE_DEFINITIONS = f"query GetFixtureDefinitions {{ fixtureDefinitions {{{DEFINITION_FIELDS}}} }}"

CREATE_FIXTURE_DEFINITION = f"""
mutation CreateFixtureDefinition($input: CreateFixtureDefinitionInput!) {{
  createFixtureDefinition(input: $input) {{{DEFINITION_FIELDS}}}
}}
"""

START_CUE_LIST = """
mutation StartCueList($cueListId: ID!, $startFromCue: Int) {
  startCueList(cueListId: $cueListId, startFromCue: $startFromCue)
}
"""

NEXT_CUE = """
mutation NextCue($cueListId: ID!, $fadeInTime: Float) {
  nextCue(cueListId: $cueListId, fadeInTime: $fadeInTime)
}
"""

PREVIOUS_CUE = """
mutation PreviousCue($cueListId: ID!, $fadeInTime: Float) {
  previousCue(cueListId: $cueListId, fadeInTime: $fadeInTime)
}
"""

GO_TO_CUE = """
mutation GoToCue($cueListId: ID!, $cueIndex: Int!, $fadeInTime: Float) {
  goToCue(cueListId: $cueListId, cueIndex: $cueIndex, fadeInTime: $fadeInTime)
}
"""

STOP_CUE_LIST = "mutation StopCueList($cueListId: ID!) { stopCueList(cueListId: $cueListId) }"

GET_CUE_LIST_PLAYBACK_STATUS = f"""
query GetCueListPlaybackStatus($cueListId: ID!) {{
  cueListPlaybackStatus(cueListId: $cueListId) {{
    cueListId
    currentCueIndex
    isPlaying
    isFading
    lastUpdated
    currentCue {{{CUE_FIELDS}}}
  }}
}}
"""

GET_CURRENT_ACTIVE_SCENE = f"query GetCurrentActiveScene {{ currentActiveScene {{{SCENE_FIELDS}}} }}"

TEAM_FROM_SERIES_QUERY = """
query TeamFromSeries($teamId: ID!) {
  allSeries(filter: { teamId: $teamId }, first: 1) {
    edges {
      node {
        teams { baseInfo { id name logoUrl } }
      }
    }
  }
}
"""

SERIES_FOR_TEAM_QUERY = """
query SeriesForTeam($teamId: ID!, $limit: Int!) {
  allSeries(
    filter: { teamId: $teamId }
    orderBy: StartTimeScheduled
    orderDirection: DESC
    first: $limit
  ) {
    totalCount
    edges {
      node {
        id
        startTimeScheduled
        format { nameShortened }
        teams { baseInfo { id name logoUrl } }
        tournament { id name }
        title { id name }
      }
    }
  }
}
"""

SERIES_STATE_QUERY_BASIC = """
query SeriesState($id: ID!) {
  seriesState(id: $id) {
    id
    valid
    finished
    startedAt
    teams {
      id
      name
      won
      score
      kills
      deaths
    }
    games {
      sequenceNumber
      finished
      teams {
        id
        name
        won
        score
        kills
        deaths
        players {
          id
          name
          kills
          deaths
          killAssistsGiven
        }
      }
    }
  }
}
"""

# Adds picked characters. Not every schema version exposes ``character``;
# callers fall back to the BASIC query on error.
SERIES_STATE_QUERY_CHARACTER = """
query SeriesState($id: ID!) {
  seriesState(id: $id) {
    id
    valid
    finished
    startedAt
    teams {
      id
      name
      won
      score
      kills
      deaths
    }
    games {
      sequenceNumber
      finished
      teams {
        id
        name
        won
        score
        kills
        deaths
        players {
          id
          name
          kills
          deaths
          killAssistsGiven
          character { id name }
        }
      }
    }
  }
}
"""

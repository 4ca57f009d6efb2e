"""GraphQL query templates for GitHub Projects API."""

# Query to get the authenticated user
VIEWER_QUERY = """
query Viewer {
  viewer {
    login
  }
}
"""

# Query to get projects linked to a repository
GET_REPOSITORY_PROJECTS = """
query GetRepositoryProjects($owner: String!, $name: String!) {
  repository(owner: $owner, name: $name) {
    projectsV2(first: 20) {
      nodes {
        id
        title
        number
        url
      }
    }
  }
}
"""

# Query to get repository ID by owner/name
GET_REPOSITORY = """
query GetRepository($owner: String!, $name: String!) {
  repository(owner: $owner, name: $name) {
    id
  }
}
"""

# Query to get project items with all field values (paginated)
GET_PROJECT_ITEMS = """
query GetProjectItems($projectId: ID!, $cursor: String) {
  node(id: $projectId) {
    ... on ProjectV2 {
      items(first: 100, after: $cursor) {
        pageInfo {
          hasNextPage
          endCursor
        }
        nodes {
          id
          fieldValues(first: 20) {
            nodes {
              __typename
              ... on ProjectV2ItemFieldSingleSelectValue {
                name
                field { ... on ProjectV2SingleSelectField { name } }
              }
              ... on ProjectV2ItemFieldTextValue {
                text
                field { ... on ProjectV2Field { name } }
              }
              ... on ProjectV2ItemFieldNumberValue {
                number
                field { ... on ProjectV2Field { name } }
              }
              ... on ProjectV2ItemFieldDateValue {
                date
                field { ... on ProjectV2Field { name } }
              }
              ... on ProjectV2ItemFieldIterationValue {
                title
                startDate
                duration
                field { ... on ProjectV2IterationField { name } }
              }
            }
          }
          content {
            __typename
            ... on Issue {
              title
              number
              url
              state
              issueType { name }
              assignees(first: 5) { nodes { login } }
              labels(first: 10) { nodes { name color } }
              repository { name }
            }
            ... on PullRequest {
              title
              number
              url
              state
              merged
              assignees(first: 5) { nodes { login } }
              labels(first: 10) { nodes { name color } }
              repository { name }
            }
            ... on DraftIssue {
              title
            }
          }
        }
      }
    }
  }
}
"""

# Query to get project fields (including Status options)
GET_PROJECT_FIELDS = """
query GetProjectFields($projectId: ID!) {
  node(id: $projectId) {
    ... on ProjectV2 {
      fields(first: 30) {
        nodes {
          __typename
          ... on ProjectV2Field {
            id
            name
            dataType
          }
          ... on ProjectV2SingleSelectField {
            id
            name
            dataType
            options { id name }
          }
          ... on ProjectV2IterationField {
            id
            name
            dataType
          }
        }
      }
    }
  }
}
"""

# Query to get project views
GET_PROJECT_VIEWS = """
query GetProjectViews($projectId: ID!) {
  node(id: $projectId) {
    ... on ProjectV2 {
      views(first: 20) {
        nodes {
          name
          filter
        }
      }
    }
  }
}
"""

# Mutation to update a project item field with an arbitrary value
UPDATE_ITEM_FIELD = """
mutation UpdateItemField($projectId: ID!, $itemId: ID!, $fieldId: ID!, $value: ProjectV2FieldValue!) {
  updateProjectV2ItemFieldValue(
    input: {
      projectId: $projectId
      itemId: $itemId
      fieldId: $fieldId
      value: $value
    }
  ) {
    projectV2Item {
      id
    }
  }
}
"""

# Mutation to set a single-select field (e.g., Status)
UPDATE_ITEM_STATUS = """
mutation UpdateItemStatus($projectId: ID!, $itemId: ID!, $fieldId: ID!, $optionId: String!) {
  updateProjectV2ItemFieldValue(
    input: {
      projectId: $projectId
      itemId: $itemId
      fieldId: $fieldId
      value: { singleSelectOptionId: $optionId }
    }
  ) {
    projectV2Item {
      id
    }
  }
}
"""

# Mutation to create a new issue
CREATE_ISSUE = """
mutation CreateIssue($repositoryId: ID!, $title: String!, $body: String) {
  createIssue(
    input: {
      repositoryId: $repositoryId
      title: $title
      body: $body
    }
  ) {
    issue {
      id
      number
    }
  }
}
"""

# Mutation to add an issue/PR to a project
ADD_ITEM_TO_PROJECT = """
mutation AddItemToProject($projectId: ID!, $contentId: ID!) {
  addProjectV2ItemById(
    input: {
      projectId: $projectId
      contentId: $contentId
    }
  ) {
    item {
      id
    }
  }
}
"""

# Query to get an issue or PR with body and comments
GET_ISSUE_DETAILS = """
query GetIssueDetails($owner: String!, $name: String!, $number: Int!) {
  repository(owner: $owner, name: $name) {
    issueOrPullRequest(number: $number) {
      __typename
      ... on Issue {
        title
        body
        state
        createdAt
        author { login }
        labels(first: 10) { nodes { name color } }
        comments(first: 50) {
          totalCount
          nodes {
            author { login }
            body
            createdAt
          }
        }
      }
      ... on PullRequest {
        title
        body
        state
        createdAt
        author { login }
        labels(first: 10) { nodes { name color } }
        comments(first: 50) {
          totalCount
          nodes {
            author { login }
            body
            createdAt
          }
        }
      }
    }
  }
}
"""

# Query to get the node ID of an issue or PR
GET_ISSUE_NODE_ID = """
query GetIssueNodeId($owner: String!, $name: String!, $number: Int!) {
  repository(owner: $owner, name: $name) {
    issueOrPullRequest(number: $number) {
      ... on Issue { id }
      ... on PullRequest { id }
    }
  }
}
"""

# Mutation to add a comment to an issue or PR
ADD_COMMENT = """
mutation AddComment($subjectId: ID!, $body: String!) {
  addComment(input: { subjectId: $subjectId, body: $body }) {
    commentEdge {
      node { id }
    }
  }
}
"""

# Query to get repository collaborators (falls back to assignable users)
GET_COLLABORATORS = """
query GetCollaborators($owner: String!, $name: String!) {
  repository(owner: $owner, name: $name) {
    collaborators(first: 50) {
      nodes { login name }
    }
    assignableUsers(first: 50) {
      nodes { login name }
    }
  }
}
"""

# Query to get recently updated issues
GET_RECENT_ISSUES = """
query GetRecentIssues($owner: String!, $name: String!, $limit: Int!) {
  repository(owner: $owner, name: $name) {
    issues(first: $limit, orderBy: { field: UPDATED_AT, direction: DESC }) {
      nodes {
        number
        title
        state
      }
    }
  }
}
"""

# Query to check whether a label exists
GET_LABEL = """
query GetLabel($owner: String!, $name: String!, $labelName: String!) {
  repository(owner: $owner, name: $name) {
    label(name: $labelName) {
      id
    }
  }
}
"""

# Query to get issue and label IDs in one round trip
GET_ISSUE_AND_LABEL = """
query GetIssueAndLabel($owner: String!, $name: String!, $number: Int!, $labelName: String!) {
  repository(owner: $owner, name: $name) {
    issue(number: $number) {
      id
    }
    label(name: $labelName) {
      id
    }
  }
}
"""

# Mutation to add labels to an issue
ADD_LABELS = """
mutation AddLabels($labelableId: ID!, $labelIds: [ID!]!) {
  addLabelsToLabelable(input: { labelableId: $labelableId, labelIds: $labelIds }) {
    clientMutationId
  }
}
"""

# Mutation to remove labels from an issue
REMOVE_LABELS = """
mutation RemoveLabels($labelableId: ID!, $labelIds: [ID!]!) {
  removeLabelsFromLabelable(input: { labelableId: $labelableId, labelIds: $labelIds }) {
    clientMutationId
  }
}
"""

# Query to find open issues carrying a label
GET_ISSUES_WITH_LABEL = """
query GetIssuesWithLabel($owner: String!, $name: String!, $labels: [String!]) {
  repository(owner: $owner, name: $name) {
    issues(first: 10, labels: $labels, states: [OPEN]) {
      nodes {
        number
      }
    }
  }
}
"""

# Query to get the issue types available in a repository
GET_ISSUE_TYPES = """
query GetIssueTypes($owner: String!, $name: String!) {
  repository(owner: $owner, name: $name) {
    issueTypes(first: 20) {
      nodes {
        id
        name
      }
    }
  }
}
"""

# Query to get an issue's node ID before updating it
GET_ISSUE_FOR_UPDATE = """
query GetIssueForUpdate($owner: String!, $name: String!, $number: Int!) {
  repository(owner: $owner, name: $name) {
    issue(number: $number) {
      id
    }
  }
}
"""

# Mutation to set an issue's type
UPDATE_ISSUE_TYPE = """
mutation UpdateIssueType($issueId: ID!, $issueTypeId: ID!) {
  updateIssue(input: { id: $issueId, issueTypeId: $issueTypeId }) {
    issue {
      id
    }
  }
}
"""

# Mutation to update an issue's title and/or body
UPDATE_ISSUE = """
mutation UpdateIssue($issueId: ID!, $title: String, $body: String) {
  updateIssue(input: { id: $issueId, title: $title, body: $body }) {
    issue {
      id
    }
  }
}
"""

# Mutation to replace an issue's body
UPDATE_ISSUE_BODY = """
mutation UpdateIssueBody($issueId: ID!, $body: String!) {
  updateIssue(input: { id: $issueId, body: $body }) {
    issue {
      id
    }
  }
}
"""

# Query to get a user's node ID by login
GET_USER_ID = """
query GetUserId($login: String!) {
  user(login: $login) {
    id
  }
}
"""

# Mutation to add assignees to an issue or PR
ADD_ASSIGNEES = """
mutation AddAssignees($assignableId: ID!, $assigneeIds: [ID!]!) {
  addAssigneesToAssignable(input: { assignableId: $assignableId, assigneeIds: $assigneeIds }) {
    clientMutationId
  }
}
"""

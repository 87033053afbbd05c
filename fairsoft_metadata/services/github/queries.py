"""GraphQL documents sent to the GitHub API.

Build or check them with the explorer: https://docs.github.com/en/graphql/overview/explorer
"""

REPOSITORY_QUERY = """
query ($owner: String!, $repo: String!, $commitLimit: Int!) {
  repository(owner: $owner, name: $repo) {
    description
    descriptionHTML
    homepageUrl
    isDisabled
    isEmpty
    isFork
    isInOrganization
    isLocked
    isMirror
    isPrivate
    isTemplate
    latestRelease {
      name
      tagName
    }
    licenseInfo {
      id
      name
      spdxId
      url
    }
    name
    mirrorUrl
    packages(first: $commitLimit) {
      nodes {
        id
        name
        packageType
        version(version: "") {
          version
          summary
        }
      }
    }
    releases(last: $commitLimit) {
      nodes {
        id
        tagName
        name
        url
      }
    }
    url
    defaultBranchRef {
      name
      target {
        ... on Commit {
          history(first: $commitLimit) {
            edges {
              node {
                author {
                  name
                  email
                  user {
                    login
                  }
                }
              }
            }
          }
        }
      }
    }
    repositoryTopics(first: $commitLimit) {
      nodes {
        url
        topic {
          id
          name
        }
      }
    }
  }
}
"""

TREE_QUERY = """
query ($owner: String!, $repo: String!, $path: String!) {
  repository(owner: $owner, name: $repo) {
    object(expression: $path) {
      ... on Tree {
        entries {
          name
          type
        }
      }
    }
  }
}
"""

BLOB_TEXT_QUERY = """
query ($owner: String!, $repo: String!, $path: String!) {
  repository(owner: $owner, name: $repo) {
    object(expression: $path) {
      ... on Blob {
        text
      }
    }
  }
}
"""

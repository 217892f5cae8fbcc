'''
Jira Changelog

Combines Git commit messages with Jira into a changelog.

Commit subjects between the last matching tag and HEAD are scanned for issue IDs (e.g.
`ABC-123`). Details for those issues are looked up on Jira, grouped into sections by issue type
(Features, Refactorings, Bugs, Other improvements) and rendered twice: as a Markdown document and
as a Slack message attachment.

Rendering and grouping are pure functions (`issues`, `model`, `markdown`, `slack`); all
interaction with git, Jira and Slack is done by callers and passed-in lookups (see `fetch`).
'''

import collections.abc

import jira_changelog.model as cm


def render_ticket(ticket: cm.Ticket) -> str:
    return f'- {ticket.summary} ({ticket.key})'


def render_section(section: cm.Section) -> list[str]:
    return [f'## {section.title}'] + [
        render_ticket(ticket) for ticket in section.tickets
    ]


def render(sections: collections.abc.Sequence[cm.Section]) -> str:
    '''
    renders the given sections as a markdown document (one level-2 header per section, followed
    by one list-item per ticket). Sections are separated by exactly one empty line.
    '''
    return '\n\n'.join(
        '\n'.join(render_section(section))
        for section in sections
    )

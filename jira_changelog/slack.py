'''
Renders changelog sections as a Slack message attachment (legacy "secondary" attachments, see
https://api.slack.com/reference/messaging/attachments).
'''

import collections.abc

import jira_changelog.model as cm


ATTACHMENT_COLOR = '#069d4f'

# see: https://api.slack.com/docs/message-formatting#how_to_escape_characters
# Replacements are applied in order. `&` must come first, otherwise the `&` of the other
# replacements would be escaped again. Note that, as a consequence, text that is already escaped
# (e.g. `&lt;`) will be escaped twice (`&amp;lt;`).
_escape_sequences = (
    ('&', '&amp;'),
    ('<', '&lt;'),
    ('>', '&gt;'),
)


def escape(text: str) -> str:
    for character, replacement in _escape_sequences:
        text = text.replace(character, replacement)
    return text


def render_ticket(ticket: cm.Ticket) -> str:
    return f'• {ticket.summary} ({ticket.key})'


def render_ticket_list(tickets: collections.abc.Iterable[cm.Ticket]) -> str:
    return '\n'.join(
        escape(render_ticket(ticket)) for ticket in tickets
    )


def render_section_field(section: cm.Section) -> dict:
    return {
        'title': section.title,
        'value': render_ticket_list(section.tickets),
        'short': False,
    }


def render_fallback_text(sections: collections.abc.Sequence[cm.Section]) -> str:
    '''
    returns a one-line summary of the given sections, e.g. `2 Features, 1 Refactorings and 3 Bugs`
    '''
    section_summaries = [f'{len(section.tickets)} {section.title}' for section in sections]

    if len(section_summaries) < 2:
        return ''.join(section_summaries)

    *every_summary_but_the_last, last_summary = section_summaries

    return ' and '.join((', '.join(every_summary_but_the_last), last_summary))


def render_attachment(sections: collections.abc.Sequence[cm.Section]) -> dict | None:
    '''
    returns the given sections as a Slack attachment, or None if there are no sections
    '''
    if not sections:
        return None

    return {
        'fallback': render_fallback_text(sections),
        'color': ATTACHMENT_COLOR,
        'fields': [render_section_field(section) for section in sections],
    }

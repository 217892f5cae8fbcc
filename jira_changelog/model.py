import collections.abc
import dataclasses
import logging
import typing


logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class Ticket:
    key: str
    type: str
    summary: str

    @staticmethod
    def from_jira_issue(issue) -> typing.Self:
        '''
        creates a Ticket from a `jira.resources.Issue` (or anything shaped like it)
        '''
        return Ticket(
            key=issue.key,
            type=issue.fields.issuetype.name,
            summary=issue.fields.summary,
        )


@dataclasses.dataclass(frozen=True)
class Category:
    '''
    a changelog category. A category w/o `type_names` matches any ticket type (catch-all).
    '''
    title: str
    type_names: frozenset[str] | None = None

    def matches(self, ticket: Ticket) -> bool:
        if self.type_names is None:
            return True
        return ticket.type in self.type_names


@dataclasses.dataclass
class Section:
    title: str
    tickets: list[Ticket] = dataclasses.field(default_factory=list)

    def add(self, ticket: Ticket):
        self.tickets.append(ticket)


# evaluated in order, first match wins; catch-all must remain last
CATEGORIES: tuple[Category, ...] = (
    Category(title='Features', type_names=frozenset(('Story', 'Task'))),
    Category(title='Refactorings', type_names=frozenset(('Refactoring',))),
    Category(title='Bugs', type_names=frozenset(('Bug', 'InstaBug'))),
    Category(title='Other improvements'),
)


def classify(
    tickets: collections.abc.Iterable[Ticket],
    categories: collections.abc.Sequence[Category]=CATEGORIES,
) -> list[Section]:
    '''
    groups the given tickets into sections, one per category. Each ticket is added to the first
    category matching its type. Sections w/o tickets are omitted; the order of the remaining
    sections is the order of `categories`, tickets retain their input order.

    Tickets not matching any category are logged and dropped (this cannot happen if
    `categories` ends with a catch-all category, which is the case for the default categories).
    '''
    sections = [Section(title=category.title) for category in categories]

    for ticket in tickets:
        for category, section in zip(categories, sections):
            if category.matches(ticket):
                section.add(ticket)
                break
        else:
            logger.warning(f'no category for {ticket.key=} of {ticket.type=} - skipping')

    return [section for section in sections if section.tickets]

# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0


from model.base import (
    BasicCredentials,
    ModelValidationError,
    NamedModelElement,
)


class JiraConfig(NamedModelElement):
    '''
    Not intended to be instantiated by users of this module
    '''

    def _required_attributes(self):
        return ['base_url', 'credentials']

    def validate(self):
        super().validate()
        if not isinstance(self.raw['credentials'], dict):
            raise ModelValidationError(
                f'{self.name()}: credentials must be a mapping with username and password'
            )
        self.credentials().validate()

    def credentials(self):
        return JiraCredentials(self.raw['credentials'])

    def base_url(self):
        return self.raw['base_url']


class JiraCredentials(BasicCredentials):
    '''
    Not intended to be instantiated by users of this module
    '''
    pass

"""Qualifiers: several concrete types under one registered type.

Resolving the super type alone is ambiguous once two implementations are
registered. Pass the concrete type as a qualifier, or use
``ADD_CONCRETE_TYPE_REGISTRATION`` to make it resolvable on its own.
"""

from __future__ import annotations

from diregistry import Container, DIRegistryResolveError, Injected, RegistrationOption


class Notifier:
    channel = "none"


class EmailNotifier(Notifier):
    channel = "email"


class SmsNotifier(Notifier):
    channel = "sms"


class Alerts:
    primary: Injected[Notifier, SmsNotifier]
    everyone: Injected[list[Notifier]]


def main() -> None:
    container = Container()
    container.register(Notifier, EmailNotifier)
    container.register(Notifier, SmsNotifier, RegistrationOption.ADD_CONCRETE_TYPE_REGISTRATION)
    container.register(Alerts)

    try:
        container.resolve(Notifier)
    except DIRegistryResolveError as error:
        print(f"ambiguous={error.cause}")  # => ambiguous=Multiple qualified candidates available: EmailNotifier, SmsNotifier. Please use a qualifier.

    email = container.resolve(Notifier, EmailNotifier)
    print(f"qualified={email.channel}")  # => qualified=email

    shared = container.resolve(Notifier, SmsNotifier) is container.resolve(SmsNotifier)
    print(f"concrete_alias_shared={shared}")  # => concrete_alias_shared=True

    alerts = container.resolve(Alerts)
    print(f"primary={alerts.primary.channel}")  # => primary=sms
    print(f"everyone={[n.channel for n in alerts.everyone]}")  # => everyone=['email', 'sms']


if __name__ == "__main__":
    main()

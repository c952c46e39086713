from errors import NotFound


def resolve_owner(services):
    """Get the user and account the CLI operates on.

    Returns:
        Tuple of (User, Account).

    Raises:
        NotFound: If setup has not been run yet.
    """
    user = services.users.find()
    if user is None:
        raise NotFound("No user found. Run 'setup' first.")
    account = services.accounts.find_for_user(user.user_id)
    if account is None:
        raise NotFound("No account found. Run 'setup' first.")
    return user, account

"""One client class per SonarQube web API area."""

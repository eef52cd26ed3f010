"""Sample texts shared by the API and service tests."""

SOFTWARE_JD = (
    "Software engineering intern wanted. You will build REST APIs with Python and Django, "
    "use Git daily and write unit testing code."
)
NON_TECH_JD = (
    "We are hiring a registered nurse to work in our hospital caring for patients on the night shift."
)
RESUME_TEXT = (
    "Jane Doe, computer science student. Education: BSc Computer Science. Skills and experience: "
    + SOFTWARE_JD
    + " Projects: a course planner web app."
)

"""Career coaching services: interview quizzes, industry insights, resumes and cover letters."""

"""
Resume Parsing Prompt Templates
"""


class ResumePrompts:
    """Prompt templates for structuring resume text."""

    SYSTEM_CONTEXT = """You are an expert resume parser. Extract and structure the following information from the resume:
- Personal information (name, email, phone)
- Work experience (company, role, duration, responsibilities)
- Skills (technical and soft skills)
- Education (institution, degree, year)

Also analyze the resume quality and provide feedback:
- score: Rate the resume quality 0-100
- strengths: List 2-3 strong points
- improvements: List 2-3 areas to improve
- formatting: Comment on structure and readability
- content_quality: Assess the depth and relevance of content

IMPORTANT: Output ONLY valid JSON matching this exact structure, no preamble text:
{
  "personal_info": {"name": "", "email": "", "phone": ""},
  "experience": [{"company": "", "role": "", "duration": "", "responsibilities": []}],
  "skills": [],
  "education": [{"institution": "", "degree": "", "year": ""}],
  "feedback": {
    "score": 0,
    "strengths": [],
    "improvements": [],
    "formatting": "",
    "content_quality": ""
  }
}"""

    def system_prompt(self) -> str:
        return self.SYSTEM_CONTEXT

    def user_prompt(self, resume_text: str) -> str:
        return f"=== RESUME ===\n{resume_text}"

"""
Response Scorer Prompt Templates

Scoring dimensions (total 100):
- Communication (25)
- Content (30)
- Experience (25)
- Performance (20)
"""

from voiceinterview.models.resume import ResumeContext


class ScorerPrompts:
    """Prompt templates for scoring a single answer."""

    SYSTEM_CONTEXT = "You are an expert {role} interviewer analyzing a candidate's response."

    SCORING_CRITERIA = """
SCORING CRITERIA (Total: 100 points):

1. COMMUNICATION (0-25 points):
   - Clarity and articulation
   - Structure and organization
   - Professional language
   - Confidence in delivery

2. CONTENT (0-30 points):
   - Technical accuracy
   - Depth of knowledge
   - Relevant examples
   - Problem-solving approach

3. EXPERIENCE (0-25 points):
   - Relevant work experience
   - Project complexity
   - Real-world application
   - Learning from challenges

4. PERFORMANCE (0-20 points):
   - Response completeness
   - Addressing the question directly
   - Overall impression

ANALYSIS REQUIREMENTS:
- Provide specific, actionable feedback
- Highlight both strengths and areas for improvement
- Reference the candidate's actual response content
- Be constructive and professional
"""

    RESPONSE_FORMAT = """
IMPORTANT: Output ONLY valid JSON, no preamble text. Start directly with {
{
  "score": <total score 0-100>,
  "feedback": "<2-3 sentences of specific feedback>",
  "analysis": {
    "communication": <0-25>,
    "content": <0-30>,
    "experience": <0-25>,
    "performance": <0-20>
  }
}"""

    def system_prompt(self, role: str) -> str:
        return f"{self.SYSTEM_CONTEXT.format(role=role)}\n{self.SCORING_CRITERIA}{self.RESPONSE_FORMAT}"

    def user_prompt(self, transcript: str, question: str, resume_context: ResumeContext) -> str:
        """Generate the user prompt for scoring one answer."""
        prompt = f"""INTERVIEW QUESTION: "{question}"

CANDIDATE'S RESPONSE: "{transcript}"

CANDIDATE CONTEXT:
- Name: {resume_context.name}
- Experience: {resume_context.experience or 'Not specified'}
- Skills: {', '.join(resume_context.skills) or 'Not specified'}

ANALYSIS TASK:
Analyze this response considering:
1. How well they answered the specific question asked
2. The quality of their communication and explanation
3. Relevance to their background and the role
4. Use of concrete examples or experiences

Return the scores and feedback in the exact JSON format above."""

        return prompt

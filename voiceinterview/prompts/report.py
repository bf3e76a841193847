"""
Final Report Prompt Templates

Generates the narrative part of the final score: strengths, improvement
areas, a short assessment and recommendations.
"""

from voiceinterview.models.resume import ResumeContext
from voiceinterview.models.scoring import CategoryScores, ResponseRecord

RESPONSE_EXCERPT_CHARS = 200


class ReportPrompts:
    """Prompt templates for the end-of-interview feedback."""

    SYSTEM_CONTEXT = """You are an expert {role} interviewer providing comprehensive feedback after completing an interview.

Your task is to analyze the candidate's overall performance and provide:

1. STRENGTHS (3-4 key strengths demonstrated)
2. IMPROVEMENT AREAS (2-3 specific areas to work on)
3. DETAILED FEEDBACK (comprehensive 3-4 sentence assessment)
4. RECOMMENDATIONS (3-4 actionable next steps)

FEEDBACK GUIDELINES:
- Be specific and reference actual responses when possible
- Provide constructive, actionable advice
- Balance positive reinforcement with growth opportunities
- Be professional and encouraging

RESPONSE FORMAT (EXACT JSON):
{{
  "strengths": ["First strength with specific example", "Second strength", "Third strength"],
  "improvement_areas": ["First area with specific advice", "Second area with actionable steps"],
  "detailed_feedback": "Comprehensive 3-4 sentence assessment of overall performance.",
  "recommendations": ["Actionable step 1", "Practical recommendation 2", "Growth opportunity 3"]
}}"""

    def system_prompt(self, role: str) -> str:
        return self.SYSTEM_CONTEXT.format(role=role)

    def user_prompt(
        self,
        responses: list[ResponseRecord],
        breakdown: CategoryScores,
        overall_score: int,
        resume_context: ResumeContext,
    ) -> str:
        """Generate the interview summary prompt."""
        summaries = []
        for index, record in enumerate(responses, start=1):
            score = f"{record.score}/100" if record.score is not None else "not scored"
            summaries.append(
                f'Question {index}: "{record.question}"\n'
                f'Response: "{record.transcript[:RESPONSE_EXCERPT_CHARS]}..."\n'
                f"Score: {score}\n"
                f"Feedback: {record.feedback or 'None'}\n"
            )

        prompt = f"""INTERVIEW SUMMARY:

CANDIDATE PROFILE:
- Name: {resume_context.name}
- Experience: {resume_context.experience or 'Not specified'}
- Skills: {', '.join(resume_context.skills) or 'Not specified'}

AGGREGATE SCORES:
- Communication: {breakdown.communication}/25
- Content: {breakdown.content}/30
- Experience: {breakdown.experience}/25
- Performance: {breakdown.performance}/20
- Overall Score: {overall_score}/100

DETAILED RESPONSES:
{chr(10).join(summaries) if summaries else 'No responses recorded.'}

ANALYSIS TASK:
Based on this interview performance, identify the candidate's strongest
skills, concrete areas for improvement and actionable recommendations.
Focus on patterns across all responses.

Return response in exact JSON format specified in system prompt."""

        return prompt

"""
AI Interviewer Prompt Templates

Contains the prompts and fixed phrasings used by the conversational
interviewer. The interviewer must sound like a human who actively
listens: acknowledge the answer, then ask about something the candidate
actually said.
"""

from voiceinterview.models.conversation import CoreTopic, FollowUpType, ResponseAnalysis
from voiceinterview.models.resume import ParsedResume


class InterviewerPrompts:
    """
    Prompt templates for question generation.

    Key principles:
    - Acknowledge every answer before asking
    - One question at a time
    - Follow-ups reference the candidate's own words
    - Topic transitions bridge from what was just said
    """

    OPENING_QUESTION = "To start, could you tell me a bit about yourself and your background in {role}?"

    CLARIFICATION_REQUEST = "I'm having trouble processing your response. Could you please repeat that?"

    CLOSING_REMARKS = [
        "Thank you for sharing so much with me today. Before we wrap up, is there anything else you'd like to tell me about yourself or any questions you have about the role?",
        "We've covered a lot of ground today. Is there anything important about your experience that we haven't discussed yet?",
        "That was a great conversation! Do you have any questions for me about the role or the company?",
    ]

    # Fixed question per topic, used when generation fails
    TOPIC_QUESTIONS: dict[CoreTopic, str] = {
        CoreTopic.TECHNICAL_EXPERIENCE: "Can you tell me about the technologies you've worked with most and how you've used them?",
        CoreTopic.PROJECT_DEEP_DIVE: "Could you walk me through a significant project you worked on?",
        CoreTopic.PROBLEM_SOLVING: "Can you tell me about a challenging problem you had to solve?",
        CoreTopic.TEAM_COLLABORATION: "How do you usually work with your team when collaborating on a project?",
        CoreTopic.WRAP_UP: "Looking back on your experience, what are you most proud of?",
    }

    TOPIC_GUIDANCE: dict[CoreTopic, str] = {
        CoreTopic.TECHNICAL_EXPERIENCE: "Explore their technical skills and experience relevant to the role. Reference something from their resume.",
        CoreTopic.PROJECT_DEEP_DIVE: "Ask them to describe a significant project they worked on and encourage detail.",
        CoreTopic.PROBLEM_SOLVING: "Ask about a challenging technical problem they solved. Frame it as a story they can tell.",
        CoreTopic.TEAM_COLLABORATION: "Ask about working with teams, leadership and communication.",
        CoreTopic.WRAP_UP: "Ask a reflective question that ties together what they shared so far.",
    }

    FOLLOW_UP_GUIDANCE: dict[FollowUpType, str] = {
        FollowUpType.CLARIFICATION: "Ask them to clarify or expand on something they said that was vague or brief.",
        FollowUpType.EXAMPLE: "Ask for a concrete example from their own experience.",
        FollowUpType.CHALLENGE: "Ask about the hardest part of what they described and how they handled it.",
        FollowUpType.OUTCOME: "Ask about the result or impact of what they described, ideally measurable.",
        FollowUpType.TECHNICAL: "Ask how the technical side worked: design choices, tools or implementation details.",
    }

    FOLLOW_UP_SYSTEM = """You are an experienced {role} interviewer who ACTIVELY LISTENS and follows up on what the candidate just shared.

CRITICAL:
- You MUST acknowledge their response first
- You MUST ask about something SPECIFIC they mentioned
- You CANNOT ask generic questions unrelated to their answer

REQUIRED FORMAT:
[Acknowledgment] + [ONE specific follow-up about what they mentioned]

FORBIDDEN:
- Generic questions like "What are your strengths?"
- Multiple questions at once
- Robotic transitions

RESPOND WITH: Only the acknowledged follow-up question."""

    TRANSITION_SYSTEM = """You are an experienced {role} interviewer moving to a new topic while keeping the conversation natural.

TRANSITION PRINCIPLES:
- Acknowledge what they shared previously
- Create a smooth bridge to the new topic
- Reference the previous discussion when relevant
- Ask ONE engaging question about the new topic

EXAMPLES:
- "Given your experience with [previous topic], I'm curious about..."
- "Your approach to [previous topic] shows great thinking. Now I'd like to explore..."

RESPOND WITH: Only the transition question with its natural bridge."""

    def opening_question(self, role: str) -> str:
        return self.OPENING_QUESTION.format(role=role)

    def follow_up_system_prompt(self, role: str) -> str:
        return self.FOLLOW_UP_SYSTEM.format(role=role)

    def transition_system_prompt(self, role: str) -> str:
        return self.TRANSITION_SYSTEM.format(role=role)

    def follow_up_user_prompt(
        self,
        conversation_context: str,
        answer: str,
        analysis: ResponseAnalysis,
    ) -> str:
        """Generate the user prompt for a follow-up question."""
        mentions = analysis.extracted_info
        guidance = self.FOLLOW_UP_GUIDANCE[analysis.follow_up_type]

        prompt = f"""{conversation_context}
CANDIDATE JUST SAID: "{answer}"

WHAT THEY MENTIONED:
- Technologies: {', '.join(mentions.technologies) or 'none'}
- Projects: {', '.join(mentions.projects) or 'none'}
- Companies: {', '.join(mentions.companies) or 'none'}
- Challenges: {', '.join(mentions.challenges) or 'none'}
- Outcomes: {', '.join(mentions.outcomes) or 'none'}

FOLLOW-UP TYPE: {analysis.follow_up_type.value}
{guidance}

REQUIREMENTS:
1. Start with a short acknowledgment, for example: "{analysis.acknowledgment}"
2. Pick ONE specific thing they mentioned
3. Ask for more detail about that specific thing, using their own words

EXAMPLE:
If they said: "I worked on a chatbot for my company"
CORRECT: "That chatbot project sounds interesting! What kind of functionality did you build into it?"
WRONG: "What technologies are you excited about?" (ignores what they said)

Generate ONE specific follow-up that directly references something they mentioned."""

        return prompt

    def transition_user_prompt(
        self,
        conversation_context: str,
        answer: str,
        next_topic: CoreTopic,
        resume: ParsedResume,
        role: str,
    ) -> str:
        """Generate the user prompt for moving to the next topic."""
        prompt = f"""{conversation_context}
CANDIDATE'S LAST RESPONSE: "{answer}"

CANDIDATE BACKGROUND:
- Name: {resume.personal_info.name}
- Experience: {', '.join(f'{exp.role} at {exp.company}' for exp in resume.experience) or 'Not specified'}
- Skills: {', '.join(resume.skills) or 'Not specified'}

ROLE: {role}
NEXT TOPIC TO EXPLORE: {next_topic.value}
TOPIC GUIDANCE: {self.TOPIC_GUIDANCE[next_topic]}

Create a smooth transition that:
1. Briefly acknowledges something from their previous response
2. Creates a natural bridge to the new topic
3. Asks an engaging question about the new topic

Make the transition feel natural and conversational, not abrupt."""

        return prompt
